"""
Periodic sitemap tasks.

The sitemap index is cached; this task rebuilds it so crawlers hitting
/sitemap.xml never wait on the database.
"""

from celery import shared_task
from src.exceptions import MissingBaseUrlError
from src.sitemap_variants.index import refresh_sitemap_index as rebuild_index
from src.sitemap_variants.logging_utils import get_logger

logger = get_logger(__name__)


@shared_task(name="sitemaps.refresh_sitemap_index", queue="maintenance")
def refresh_sitemap_index():
    """Invalidate and re-warm the cached sitemap index."""
    try:
        url_count = rebuild_index()
    except MissingBaseUrlError as e:
        # Requests still build the index from their own host
        logger.warning(f"Sitemap index refresh skipped: {e}", extra=e.context)
        return {"status": "skipped", "reason": e.message}

    logger.info(f"Sitemap index refreshed: {url_count} entries")
    return {"status": "success", "urls": url_count}
