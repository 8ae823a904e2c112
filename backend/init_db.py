from database import ApiDbContext, ContextOptions
import logging

logger = logging.getLogger(__name__)


def init_database(options: ContextOptions) -> bool:
    """
    Create the schema if it does not exist yet.

    Returns:
        True if the schema was created by this call
    """
    with ApiDbContext(options) as context:
        created = context.ensure_created()

    if created:
        logger.info("✅ Database initialized")
    else:
        logger.info("Database schema already present")
    return created
