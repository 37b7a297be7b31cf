from django.conf import settings
from django.contrib import admin
from django.http import HttpResponse
from django.urls import include, path
from django.views.decorators.cache import cache_page
from django.views.decorators.http import require_http_methods
from src.sitemap_variants.logging_utils import get_logger
from src.sitemap_variants.variants import get_base_url

logger = get_logger(__name__)


@require_http_methods(["GET"])
@cache_page(3600, key_prefix="robots_txt")
def robots_txt(request):
    """Serve robots.txt pointing crawlers at the sitemap index."""
    base_url = get_base_url(request)
    admin_path = getattr(settings, "ADMIN_URL_PATH", "admin")

    content = (
        "User-agent: *\n"
        "Allow: /\n\n"
        "# Disallow admin endpoints\n"
        f"Disallow: /{admin_path}/\n\n"
        "# Sitemap\n"
        f"Sitemap: {base_url}/sitemap.xml\n"
    )
    return HttpResponse(content, content_type="text/plain")


@require_http_methods(["GET"])
def health_check(request):
    """Report whether stored sitemap pages and the index cache are reachable."""
    from django.core.cache import cache
    from django.db import DatabaseError
    from src.sitemap_variants.models import SitemapPage

    try:
        published_pages = SitemapPage.objects.published().count()
    except DatabaseError as e:
        logger.error("Health check: sitemap table unavailable: %s", e)
        return HttpResponse(
            f"ERROR: database: {e}", content_type="text/plain", status=503
        )

    cache.set("health_check", "ok", 10)
    if cache.get("health_check") != "ok":
        logger.error("Health check: cache round trip failed")
        return HttpResponse("ERROR: cache", content_type="text/plain", status=503)

    return HttpResponse(
        f"OK\npublished_pages: {published_pages}\n",
        content_type="text/plain",
        status=200,
    )


urlpatterns = [
    path("robots.txt", robots_txt, name="robots_txt"),
    path("health/", health_check, name="health_check"),
    # Admin panel - read ADMIN_URL_PATH dynamically from settings
    path(f"{getattr(settings, 'ADMIN_URL_PATH', 'admin')}/", admin.site.urls),
    # Sitemaps are served without language prefix
    path("", include("src.sitemap_variants.urls")),
]
