"""Sitemap variants app configuration."""

from django.apps import AppConfig


class SitemapVariantsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "src.sitemap_variants"
    verbose_name = "Sitemap variants"

    def ready(self):
        """Import signals and built-in URL generators when app is ready."""
        from . import generators  # noqa: F401
        from . import signals  # noqa: F401
