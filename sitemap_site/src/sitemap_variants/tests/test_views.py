"""
Tests for sitemap views and stored variant pages.
"""
from django.core.cache import cache
from django.test import Client, TestCase, override_settings
from src.exceptions import MissingBaseUrlError
from src.sitemap_variants.index import get_index_cache_key
from src.sitemap_variants.models import LISTING_DELTA, SitemapPage

URLSET = '<?xml version="1.0" encoding="UTF-8"?><urlset>{}</urlset>'
BASE_URL = "https://example.com"


@override_settings(
    CACHES={
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        }
    },
    SITEMAP_INDEX_SETTINGS={"variants": ["default", "articles"]},
    SITEMAP_BASE_URL="",
    SITE_BASE_URL="https://example.com",
)
class SitemapViewsTestCase(TestCase):
    """Test cases for sitemap views."""

    def setUp(self):
        self.client = Client()
        cache.clear()

    def test_sitemap_index_renders(self):
        response = self.client.get("/sitemap.xml")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "application/xml; charset=utf-8")
        content = response.content.decode("utf-8")
        self.assertIn("<sitemapindex", content)
        self.assertIn("<loc>https://example.com/default/sitemap.xml</loc>", content)
        self.assertIn("<loc>https://example.com/articles/sitemap.xml</loc>", content)
        self.assertNotIn("categories", content)
        self.assertEqual(content.count("<lastmod>"), 2)

    def test_sitemap_index_lists_pages_of_paginated_variant(self):
        SitemapPage.objects.publish_variant(
            "articles", [URLSET.format(i) for i in range(3)]
        )

        content = self.client.get("/sitemap.xml").content.decode("utf-8")

        for page in (1, 2, 3):
            self.assertIn(f"https://example.com/articles/sitemap-{page}.xml", content)
        self.assertNotIn("https://example.com/articles/sitemap.xml", content)

    @override_settings(SITE_BASE_URL="", DEBUG=False)
    def test_sitemap_index_uses_request_host_without_base_url(self):
        content = self.client.get(
            "/sitemap.xml", HTTP_HOST="testserver"
        ).content.decode("utf-8")

        self.assertIn("<loc>https://testserver/default/sitemap.xml</loc>", content)

    def test_sitemap_index_is_cached_until_pages_change(self):
        self.client.get("/sitemap.xml")
        self.assertIsNotNone(cache.get(get_index_cache_key(BASE_URL)))

        with self.captureOnCommitCallbacks(execute=True):
            SitemapPage.objects.create(
                type="default",
                delta=1,
                status=SitemapPage.STATUS_PUBLISHED,
                sitemap_string=URLSET.format(""),
            )

        self.assertIsNone(cache.get(get_index_cache_key(BASE_URL)))

    def test_cache_is_kept_until_page_change_commits(self):
        self.client.get("/sitemap.xml")

        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            SitemapPage.objects.publish_variant("default", [URLSET.format("")])
            self.assertIsNotNone(cache.get(get_index_cache_key(BASE_URL)))

        self.assertTrue(callbacks)
        for callback in callbacks:
            callback()
        self.assertIsNone(cache.get(get_index_cache_key(BASE_URL)))

    @override_settings(SITE_BASE_URL="", DEBUG=False)
    def test_index_is_cached_per_host(self):
        first = self.client.get("/sitemap.xml", HTTP_HOST="localhost")
        second = self.client.get("/sitemap.xml", HTTP_HOST="testserver")

        self.assertIn(
            "<loc>https://localhost/default/sitemap.xml</loc>",
            first.content.decode("utf-8"),
        )
        self.assertIn(
            "<loc>https://testserver/default/sitemap.xml</loc>",
            second.content.decode("utf-8"),
        )

    @override_settings(SITE_BASE_URL="", DEBUG=True)
    def test_unsupported_forwarded_proto_is_ignored(self):
        self.client.get("/sitemap.xml", HTTP_X_FORWARDED_PROTO="javascript")
        content = self.client.get("/sitemap.xml").content.decode("utf-8")

        self.assertNotIn("javascript:", content)
        self.assertIn("<loc>http://testserver/default/sitemap.xml</loc>", content)

    def test_sitemap_index_rejects_post(self):
        response = self.client.post("/sitemap.xml")
        self.assertEqual(response.status_code, 405)

    def test_unpaginated_variant_serves_its_only_page(self):
        SitemapPage.objects.publish_variant("default", [URLSET.format("only")])

        response = self.client.get("/default/sitemap.xml")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content.decode("utf-8"), URLSET.format("only"))
        self.assertEqual(response["X-Robots-Tag"], "noindex")

    def test_paginated_variant_serves_listing(self):
        SitemapPage.objects.publish_variant(
            "articles", [URLSET.format("a"), URLSET.format("b")]
        )

        content = self.client.get("/articles/sitemap.xml").content.decode("utf-8")

        self.assertIn("<sitemapindex", content)
        self.assertIn("https://example.com/articles/sitemap-1.xml", content)
        self.assertIn("https://example.com/articles/sitemap-2.xml", content)

    def test_variant_page_serves_stored_chunk(self):
        SitemapPage.objects.publish_variant(
            "articles", [URLSET.format("a"), URLSET.format("b")]
        )

        response = self.client.get("/articles/sitemap-2.xml")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content.decode("utf-8"), URLSET.format("b"))

    def test_missing_variant_page_returns_404(self):
        SitemapPage.objects.publish_variant("articles", [URLSET.format("a")])

        self.assertEqual(self.client.get("/articles/sitemap-5.xml").status_code, 404)
        self.assertEqual(self.client.get("/articles/sitemap-0.xml").status_code, 404)

    def test_unknown_variant_returns_404(self):
        self.assertEqual(self.client.get("/nope/sitemap.xml").status_code, 404)
        self.assertEqual(self.client.get("/nope/sitemap-1.xml").status_code, 404)

    def test_variant_without_pages_returns_404(self):
        self.assertEqual(self.client.get("/categories/sitemap.xml").status_code, 404)

    def test_unpublished_page_is_not_served(self):
        SitemapPage.objects.create(
            type="default",
            delta=1,
            status=SitemapPage.STATUS_UNPUBLISHED,
            sitemap_string=URLSET.format(""),
        )

        self.assertEqual(self.client.get("/default/sitemap-1.xml").status_code, 404)

    def test_index_variant_route_serves_index(self):
        response = self.client.get("/sitemap_index/sitemap.xml")

        self.assertEqual(response.status_code, 200)
        self.assertIn("<sitemapindex", response.content.decode("utf-8"))

    def test_robots_txt_points_at_sitemap_index(self):
        response = self.client.get("/robots.txt")

        self.assertEqual(response.status_code, 200)
        self.assertIn(
            "Sitemap: https://example.com/sitemap.xml", response.content.decode("utf-8")
        )

    def test_health_check_reports_published_pages(self):
        SitemapPage.objects.publish_variant("default", [URLSET.format("")])

        response = self.client.get("/health/")

        self.assertEqual(response.status_code, 200)
        self.assertIn("published_pages: 1", response.content.decode("utf-8"))

    @override_settings(
        CACHES={"default": {"BACKEND": "django.core.cache.backends.dummy.DummyCache"}}
    )
    def test_health_check_fails_when_cache_is_unusable(self):
        response = self.client.get("/health/")

        self.assertEqual(response.status_code, 503)


@override_settings(SITE_BASE_URL="https://example.com", SITEMAP_BASE_URL="")
class SitemapPageManagerTestCase(TestCase):
    """Test cases for storing variant pages."""

    def test_publish_single_chunk_has_no_listing(self):
        pages = SitemapPage.objects.publish_variant("default", [URLSET.format("")])

        self.assertEqual(len(pages), 1)
        self.assertEqual(SitemapPage.objects.count_published("default"), 1)
        self.assertFalse(
            SitemapPage.objects.filter(type="default", delta=LISTING_DELTA).exists()
        )

    def test_publish_chunks_adds_listing(self):
        SitemapPage.objects.publish_variant(
            "articles", [URLSET.format(i) for i in range(3)]
        )

        self.assertEqual(SitemapPage.objects.count_published("articles"), 4)
        listing = SitemapPage.objects.get(type="articles", delta=LISTING_DELTA)
        self.assertTrue(listing.is_listing)
        self.assertEqual(listing.sitemap_string.count("<sitemap>"), 3)

    def test_publish_replaces_previous_pages(self):
        SitemapPage.objects.publish_variant(
            "articles", [URLSET.format(i) for i in range(3)]
        )
        SitemapPage.objects.publish_variant("articles", [URLSET.format("new")])

        self.assertEqual(SitemapPage.objects.count_published("articles"), 1)
        self.assertEqual(
            SitemapPage.objects.get(type="articles").sitemap_string,
            URLSET.format("new"),
        )

    def test_publish_unknown_variant_raises(self):
        from src.exceptions import UnknownVariantError

        with self.assertRaises(UnknownVariantError):
            SitemapPage.objects.publish_variant("nope", [URLSET.format("")])

    def test_remove_variant(self):
        SitemapPage.objects.publish_variant(
            "articles", [URLSET.format(i) for i in range(2)]
        )

        self.assertEqual(SitemapPage.objects.remove_variant("articles"), 3)
        self.assertEqual(SitemapPage.objects.count_published("articles"), 0)

    @override_settings(SITE_BASE_URL="")
    def test_publish_chunks_without_base_url_raises(self):
        with self.assertRaises(MissingBaseUrlError):
            SitemapPage.objects.publish_variant(
                "articles", [URLSET.format(i) for i in range(2)]
            )

        self.assertEqual(SitemapPage.objects.count_published("articles"), 0)

    @override_settings(SITE_BASE_URL="")
    def test_publish_chunks_with_explicit_base_url(self):
        SitemapPage.objects.publish_variant(
            "articles", [URLSET.format(i) for i in range(2)], base_url="https://b.test/"
        )

        listing = SitemapPage.objects.get(type="articles", delta=LISTING_DELTA)
        self.assertIn(
            "<loc>https://b.test/articles/sitemap-1.xml</loc>", listing.sitemap_string
        )

    @override_settings(SITE_BASE_URL="")
    def test_publish_single_chunk_needs_no_base_url(self):
        SitemapPage.objects.publish_variant("default", [URLSET.format("")])

        self.assertEqual(SitemapPage.objects.count_published("default"), 1)
