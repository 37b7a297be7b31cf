"""
URL generator plugins for the sitemap index.

A URL generator splits its work into data sets (get_data_sets) and turns
each data set into a list of {"url", "lastmod"} records (generate).
Generators register themselves under a plugin id so the index can be
assembled from settings.SITEMAP_INDEX_GENERATORS.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from django.urls import reverse
from django.utils import timezone
from src.exceptions import UnknownUrlGeneratorError

from .logging_utils import get_logger
from .models import SitemapPage
from .variants import (
    SITEMAP_INDEX_VARIANT,
    get_base_url,
    get_enabled_variants,
    get_sitemap_variants,
)

logger = get_logger(__name__)

_url_generators: dict[str, type[UrlGeneratorBase]] = {}


def register_url_generator(plugin_id: str, label: str = "", description: str = ""):
    """Class decorator registering a URL generator under plugin_id."""

    def decorator(cls):
        cls.plugin_id = plugin_id
        cls.label = label or plugin_id
        cls.description = description
        _url_generators[plugin_id] = cls
        return cls

    return decorator


def get_url_generator_definitions() -> dict[str, type[UrlGeneratorBase]]:
    return dict(_url_generators)


def get_url_generator(plugin_id: str, **kwargs) -> UrlGeneratorBase:
    """Instantiate the URL generator registered under plugin_id."""
    try:
        generator_class = _url_generators[plugin_id]
    except KeyError:
        raise UnknownUrlGeneratorError(
            f"No URL generator registered as '{plugin_id}'",
            context={"plugin_id": plugin_id, "registered": list(_url_generators)},
        ) from None
    return generator_class(**kwargs)


class UrlGeneratorBase:
    """Base class for URL generator plugins."""

    plugin_id = ""
    label = ""
    description = ""

    def __init__(
        self,
        settings: dict[str, Any] | None = None,
        request_time: datetime | None = None,
    ):
        self.settings = dict(settings or {})
        self.request_time = request_time or timezone.now()

    def get_data_sets(self) -> list[dict[str, Any]]:
        raise NotImplementedError

    def process_data_set(self, data_set: dict[str, Any]) -> list[dict[str, Any]] | bool:
        raise NotImplementedError

    def generate(self, data_set: dict[str, Any]) -> list[dict[str, Any]]:
        path_data = self.process_data_set(data_set)
        return path_data if path_data is not False else []

    def get_lastmod(self) -> str:
        """ISO-8601 timestamp of the request, e.g. 2026-10-19T12:00:00+00:00."""
        return timezone.localtime(self.request_time).isoformat(timespec="seconds")


@register_url_generator(
    "sitemap_variant",
    label="Sitemap variant URL generator",
    description="Generates URLs for sitemap variants.",
)
class SitemapVariantUrlGenerator(UrlGeneratorBase):
    """Lists the (paginated) sitemap of every enabled variant."""

    def get_data_sets(self) -> list[dict[str, Any]]:
        sitemap_variants = get_sitemap_variants()
        sitemap_variants.pop(SITEMAP_INDEX_VARIANT, None)
        enabled_variants = get_enabled_variants()

        return [
            {"variant": variant_key}
            for variant_key in sitemap_variants
            if variant_key in enabled_variants
        ]

    def get_custom_base_url(self) -> str:
        custom_base_url = self.settings.get("base_url")
        return custom_base_url if custom_base_url else get_base_url()

    def get_number_of_variant_pages(self, sitemap_variant: str) -> int:
        """Number of published pages stored for a variant, never less than 1."""
        pages = SitemapPage.objects.count_published(sitemap_variant)
        return pages if pages else 1

    def _absolute_url(self, route_name: str, **kwargs) -> str:
        # Sitemap routes live outside i18n patterns, so no language prefix
        return self.get_custom_base_url().rstrip("/") + reverse(route_name, kwargs=kwargs)

    def process_data_set(self, data_set: dict[str, Any]) -> list[dict[str, Any]]:
        variant = data_set["variant"]
        lastmod = self.get_lastmod()
        pages = self.get_number_of_variant_pages(variant)

        if pages > 1:
            # The last page is a listing with pagination only.
            urls = [
                {
                    "url": self._absolute_url(
                        "sitemap_variant_page", variant=variant, page=page
                    ),
                    "lastmod": lastmod,
                }
                for page in range(1, pages)
            ]
        else:
            urls = [
                {
                    "url": self._absolute_url("sitemap_variant", variant=variant),
                    "lastmod": lastmod,
                }
            ]

        logger.debug(
            "Generated sitemap index URLs for variant %s",
            variant,
            extra={"variant": variant, "pages": pages, "urls": len(urls)},
        )
        return urls
