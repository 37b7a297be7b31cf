"""Sitemap variant registry and sitemap related settings."""

from __future__ import annotations

from typing import Any

from django.conf import settings
from src.exceptions import MissingBaseUrlError, UnknownVariantError

SITEMAP_INDEX_VARIANT = "sitemap_index"

# Schemes accepted from X-Forwarded-Proto
ALLOWED_SCHEMES = ("http", "https")

_INDEX_DEFINITION = {
    "label": "Sitemap index",
    "type": SITEMAP_INDEX_VARIANT,
    "weight": -100,
}


def get_sitemap_variants() -> dict[str, dict[str, Any]]:
    """Return the configured variants ordered by weight, index variant included."""
    variants = dict(getattr(settings, "SITEMAP_VARIANTS", None) or {})
    variants.setdefault(SITEMAP_INDEX_VARIANT, dict(_INDEX_DEFINITION))

    ordered = sorted(
        variants.items(), key=lambda item: (item[1].get("weight", 0), item[0])
    )
    return dict(ordered)


def get_variant(variant: str) -> dict[str, Any]:
    """Return the definition of a variant or raise UnknownVariantError."""
    variants = get_sitemap_variants()
    if variant not in variants:
        raise UnknownVariantError(
            f"Sitemap variant '{variant}' is not defined",
            context={"variant": variant, "known_variants": list(variants)},
        )
    return variants[variant]


def get_enabled_variants() -> list[str]:
    """Return the allow-list of variants listed in the sitemap index."""
    index_settings = getattr(settings, "SITEMAP_INDEX_SETTINGS", None) or {}
    enabled = index_settings.get("variants")
    if not enabled:
        return []
    return [variant for variant in enabled if variant]


def get_base_url(request=None) -> str:
    """
    Return the base URL used for absolute sitemap links, without trailing slash.

    Preference order: SITEMAP_BASE_URL, SITE_BASE_URL, then the scheme and
    host of the current request.
    """
    for setting_name in ("SITEMAP_BASE_URL", "SITE_BASE_URL"):
        base_url = getattr(settings, setting_name, "")
        if base_url:
            return base_url.rstrip("/")

    if request is None:
        return ""

    # Prefer X-Forwarded-Proto (from Nginx), fall back to request.scheme
    scheme = request.META.get("HTTP_X_FORWARDED_PROTO", "").strip().lower()
    if scheme not in ALLOWED_SCHEMES:
        scheme = request.scheme
    # Force HTTPS in production (if not DEBUG)
    if not getattr(settings, "DEBUG", False) and scheme == "http":
        scheme = "https"
    return f"{scheme}://{request.get_host()}"


def require_base_url(request=None) -> str:
    """Return get_base_url(request), raising MissingBaseUrlError when it is empty."""
    base_url = get_base_url(request)
    if not base_url:
        raise MissingBaseUrlError(
            "Set SITEMAP_BASE_URL or SITE_BASE_URL to build sitemaps outside a request",
            context={"settings": ["SITEMAP_BASE_URL", "SITE_BASE_URL"]},
        )
    return base_url
