"""Assembly and caching of the master sitemap index."""

import hashlib
import uuid

from django.conf import settings
from django.core.cache import cache
from django.utils import timezone

from .generators import get_url_generator
from .logging_utils import (
    build_request_context,
    get_logger,
    log_index_build_start,
    log_index_build_success,
)
from .rendering import render_sitemap_index
from .variants import require_base_url

logger = get_logger(__name__)

SITEMAP_INDEX_CACHE_PREFIX = "sitemap_variants:index_xml:v2"
# Changing the generation orphans every cached index, whatever its base URL
SITEMAP_INDEX_GENERATION_KEY = "sitemap_variants:index_generation"


def _index_generation() -> str:
    return cache.get_or_set(SITEMAP_INDEX_GENERATION_KEY, uuid.uuid4().hex, None)


def get_index_cache_key(base_url: str) -> str:
    """Cache key of the index built for base_url."""
    base_hash = hashlib.md5(base_url.encode()).hexdigest()
    return f"{SITEMAP_INDEX_CACHE_PREFIX}:{_index_generation()}:{base_hash}"


def build_index_urls(generator_ids=None, base_url=None) -> list[dict]:
    """Run the configured URL generators over all of their data sets."""
    if generator_ids is None:
        generator_ids = getattr(settings, "SITEMAP_INDEX_GENERATORS", ["sitemap_variant"])

    request_time = timezone.now()
    generator_settings = {"base_url": base_url} if base_url else {}

    urls = []
    for plugin_id in generator_ids:
        generator = get_url_generator(
            plugin_id, settings=generator_settings, request_time=request_time
        )
        for data_set in generator.get_data_sets():
            urls.extend(generator.generate(data_set))
    return urls


def get_sitemap_index_xml(request=None) -> str:
    """
    Return the sitemap index XML, building and caching it on a miss.

    Raises MissingBaseUrlError when called without a request and no base
    URL setting, so relative links are never cached.
    """
    base_url = require_base_url(request)
    cache_key = get_index_cache_key(base_url)
    cached = cache.get(cache_key)
    if cached:
        return cached

    context = build_request_context(request, base_url=base_url)
    start_time = log_index_build_start(logger, context)
    urls = build_index_urls(base_url=base_url)
    sitemap = render_sitemap_index(urls)
    log_index_build_success(logger, context, start_time, len(urls))

    cache.set(
        cache_key,
        sitemap,
        getattr(settings, "SITEMAP_CACHE_TIMEOUT", 60 * 60 * 24),
    )
    return sitemap


def invalidate_sitemap_index() -> None:
    """Drop every cached sitemap index."""
    cache.set(SITEMAP_INDEX_GENERATION_KEY, uuid.uuid4().hex, None)


def refresh_sitemap_index() -> int:
    """Rebuild the cached sitemap index. Returns the number of entries."""
    require_base_url()
    invalidate_sitemap_index()
    sitemap = get_sitemap_index_xml()
    return sitemap.count("<sitemap>")
