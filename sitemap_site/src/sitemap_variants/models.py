"""Persisted sitemap pages, one row per generated page of a sitemap variant."""

from django.db import models, transaction
from django.urls import reverse
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

# delta of the row listing the pages of a paginated variant
LISTING_DELTA = 0


class SitemapPageQuerySet(models.QuerySet):
    def published(self, variant=None):
        qs = self.filter(status=SitemapPage.STATUS_PUBLISHED)
        if variant is not None:
            qs = qs.filter(type=variant)
        return qs

    def count_published(self, variant):
        return self.published(variant).count()


class SitemapPageManager(models.Manager.from_queryset(SitemapPageQuerySet)):
    def publish_variant(self, variant, chunks, base_url=None):
        """
        Replace the published pages of a variant with the given XML chunks.

        Chunks are stored as pages 1..n. When there is more than one chunk a
        listing row (delta 0) pointing at every page is stored as well; its
        links need base_url or a configured base URL (MissingBaseUrlError).
        """
        from .index import invalidate_sitemap_index
        from .rendering import render_sitemap_index
        from .variants import get_variant, require_base_url

        get_variant(variant)
        chunks = list(chunks)
        now = timezone.now()
        if len(chunks) > 1:
            base_url = (base_url or require_base_url()).rstrip("/")

        with transaction.atomic():
            self.filter(type=variant).delete()
            pages = [
                self.model(
                    type=variant,
                    delta=delta,
                    status=SitemapPage.STATUS_PUBLISHED,
                    sitemap_string=chunk,
                    sitemap_created=now,
                )
                for delta, chunk in enumerate(chunks, start=1)
            ]

            if len(pages) > 1:
                lastmod = timezone.localtime(now).isoformat(timespec="seconds")
                listing = render_sitemap_index(
                    [
                        {
                            "url": base_url
                            + reverse(
                                "sitemap_variant_page",
                                kwargs={"variant": variant, "page": page.delta},
                            ),
                            "lastmod": lastmod,
                        }
                        for page in pages
                    ]
                )
                pages.append(
                    self.model(
                        type=variant,
                        delta=LISTING_DELTA,
                        status=SitemapPage.STATUS_PUBLISHED,
                        sitemap_string=listing,
                        sitemap_created=now,
                    )
                )

            created = self.bulk_create(pages)
            # bulk_create skips post_save, so the index cache is dropped by hand
            transaction.on_commit(invalidate_sitemap_index)

        return created

    def remove_variant(self, variant):
        """Delete every stored page of a variant. Returns the number deleted."""
        from .index import invalidate_sitemap_index

        with transaction.atomic():
            deleted, _ = self.filter(type=variant).delete()
            transaction.on_commit(invalidate_sitemap_index)
        return deleted


class SitemapPage(models.Model):
    """A generated sitemap page of a variant."""

    STATUS_UNPUBLISHED = 0
    STATUS_PUBLISHED = 1
    STATUS_CHOICES = [
        (STATUS_UNPUBLISHED, _("Unpublished")),
        (STATUS_PUBLISHED, _("Published")),
    ]

    type = models.SlugField(max_length=50, db_index=True, verbose_name=_("Variant"))
    delta = models.PositiveIntegerField(
        default=1,
        verbose_name=_("Page"),
        help_text=_("Page number. 0 is the listing of a paginated variant."),
    )
    status = models.PositiveSmallIntegerField(
        choices=STATUS_CHOICES, default=STATUS_UNPUBLISHED, verbose_name=_("Status")
    )
    sitemap_string = models.TextField(verbose_name=_("Sitemap XML"))
    sitemap_created = models.DateTimeField(
        default=timezone.now, verbose_name=_("Created")
    )

    objects = SitemapPageManager()

    class Meta:
        db_table = "simple_sitemap"
        verbose_name = _("Sitemap page")
        verbose_name_plural = _("Sitemap pages")
        ordering = ["type", "delta"]
        constraints = [
            models.UniqueConstraint(
                fields=["type", "delta", "status"], name="sitemap_page_type_delta_status"
            ),
        ]
        indexes = [
            models.Index(fields=["type", "status"], name="sitemap_page_type_status_idx"),
        ]

    def __str__(self):
        return f"{self.type} #{self.delta}"

    @property
    def is_listing(self):
        return self.delta == LISTING_DELTA
