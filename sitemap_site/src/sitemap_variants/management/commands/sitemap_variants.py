"""
Management command to inspect and maintain sitemap variants.

Usage:
    python manage.py sitemap_variants
    python manage.py sitemap_variants --refresh
    python manage.py sitemap_variants --clear --variant articles
"""

from django.core.management.base import BaseCommand, CommandError
from src.exceptions import MissingBaseUrlError, UnknownVariantError
from src.sitemap_variants.index import refresh_sitemap_index
from src.sitemap_variants.models import SitemapPage
from src.sitemap_variants.variants import (
    SITEMAP_INDEX_VARIANT,
    get_enabled_variants,
    get_sitemap_variants,
    get_variant,
)


class Command(BaseCommand):
    help = "List sitemap variants with their published page counts"

    def add_arguments(self, parser):
        parser.add_argument(
            "--refresh",
            action="store_true",
            help="Rebuild the cached sitemap index",
        )
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Delete all stored pages of --variant",
        )
        parser.add_argument(
            "--variant",
            type=str,
            help="Variant to operate on (e.g., articles)",
        )

    def handle(self, *args, **options):
        variant = options.get("variant")

        if options.get("clear"):
            if not variant:
                raise CommandError("--clear requires --variant")
            try:
                get_variant(variant)
            except UnknownVariantError as e:
                raise CommandError(e.to_dict()["message"]) from e
            deleted = SitemapPage.objects.remove_variant(variant)
            self.stdout.write(
                self.style.SUCCESS(f"Removed {deleted} page(s) of '{variant}'")
            )

        enabled = get_enabled_variants()
        for key, definition in get_sitemap_variants().items():
            if key == SITEMAP_INDEX_VARIANT:
                continue
            if variant and key != variant:
                continue
            pages = SitemapPage.objects.count_published(key)
            status = "enabled" if key in enabled else "disabled"
            self.stdout.write(
                f"{key:<20} {definition.get('label', key):<24} {status:<9} {pages} page(s)"
            )

        if options.get("refresh"):
            try:
                url_count = refresh_sitemap_index()
            except MissingBaseUrlError as e:
                raise CommandError(e.message) from e
            self.stdout.write(
                self.style.SUCCESS(f"Sitemap index rebuilt with {url_count} entries")
            )
