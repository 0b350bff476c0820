from urllib.parse import quote

from django.conf import settings


def _prefix() -> str:
    return settings.STANDUP["KEY_PREFIX"].rstrip("/")


def users_prefix() -> str:
    return f"{_prefix()}/users/"


def teams_prefix() -> str:
    return f"{_prefix()}/teams/"


def standups_prefix(team_id: str) -> str:
    return f"{_prefix()}/standups/{team_id}/"


def users_key(user_id: str) -> str:
    return f"{users_prefix()}{user_id}.json"


def team_key(team_id: str) -> str:
    return f"{teams_prefix()}{team_id}.json"


def email_key(email: str) -> str:
    return f"{_prefix()}/email/{quote(email.strip().lower(), safe='')}.json"


def standup_key(team_id: str, date: str) -> str:
    return f"{standups_prefix(team_id)}{date}.json"


def date_from_standup_key(team_id: str, key: str) -> str | None:
    """
    Returns the YYYY-MM-DD part of a standup key, or None when the key does not
    belong to the team's standups.
    """
    prefix = standups_prefix(team_id)
    if not key.startswith(prefix) or not key.endswith(".json"):
        return None
    return key[len(prefix) : -len(".json")]
