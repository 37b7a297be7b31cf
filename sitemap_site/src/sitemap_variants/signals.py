"""Signals keeping the cached sitemap index in step with stored pages."""

import logging

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .index import invalidate_sitemap_index

logger = logging.getLogger(__name__)


@receiver(post_save, sender="sitemap_variants.SitemapPage")
@receiver(post_delete, sender="sitemap_variants.SitemapPage")
def invalidate_index_on_page_change(sender, instance, **kwargs):  # noqa: ARG001
    """Drop the cached index once a page write or removal is committed."""
    transaction.on_commit(invalidate_sitemap_index)
    logger.debug("Sitemap index invalidation scheduled after change to %s", instance)
