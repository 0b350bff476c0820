import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_SETTINGS_MODULE = "standup_project.settings.settings"
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


def configure_settings_module(env_file: Path = ENV_FILE) -> str:
    """
    Load the project's .env file and point Django at the settings module.
    Variables already present in the environment are left as they are.
    """
    load_dotenv(env_file)
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", DEFAULT_SETTINGS_MODULE)
    return os.environ["DJANGO_SETTINGS_MODULE"]
