import logging
import time
from standup_project.db.config import DatabaseManager

logger = logging.getLogger(__name__)


def initialize_database(max_retries=5, retry_delay=2):
    """
    Verify the document store is reachable.
    Includes retry logic for Docker environments.
    """
    db_manager = DatabaseManager()

    for attempt in range(max_retries):
        try:
            if db_manager.check_database_health():
                logger.info(f"Database '{db_manager.get_database().name}' is reachable")
                return True
            if attempt < max_retries - 1:
                logger.warning(
                    f"Database health check failed, attempt {attempt + 1}. Retrying in {retry_delay} seconds..."
                )
                time.sleep(retry_delay)
        except Exception as e:
            if attempt < max_retries - 1:
                logger.warning(f"Error checking database health: {str(e)}. Retrying in {retry_delay} seconds...")
                time.sleep(retry_delay)
            else:
                logger.error(f"Failed to connect to database after {max_retries} attempts: {str(e)}")
                return False

    logger.error("All database connection attempts failed")
    return False
