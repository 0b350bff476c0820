import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class StandupConfig(AppConfig):
    name = "standup"

    def ready(self):
        """Initialize application components when Django starts"""

        if settings.TESTING:
            logger.info("Test mode detected - skipping database initialization")
            return

        from standup_project.db.init import initialize_database

        initialize_database()
