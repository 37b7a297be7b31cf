"""Views serving the sitemap index and the stored variant sitemap pages."""

from django.http import Http404, HttpResponse
from django.views.decorators.http import require_http_methods
from src.exceptions import UnknownVariantError

from .index import get_sitemap_index_xml
from .logging_utils import build_request_context, get_logger
from .models import LISTING_DELTA, SitemapPage
from .variants import SITEMAP_INDEX_VARIANT, get_variant

logger = get_logger(__name__)

XML_CONTENT_TYPE = "application/xml; charset=utf-8"


def _xml_response(content: str) -> HttpResponse:
    response = HttpResponse(content, content_type=XML_CONTENT_TYPE)
    response["X-Robots-Tag"] = "noindex"
    return response


def _published_pages(request, variant: str):
    """Published pages of a variant, 404 when the variant is not defined."""
    try:
        get_variant(variant)
    except UnknownVariantError as e:
        logger.info(
            "Sitemap requested for unknown variant",
            extra=build_request_context(request, variant=variant, error=str(e)),
        )
        raise Http404(str(e)) from e
    return SitemapPage.objects.published(variant)


@require_http_methods(["GET"])
def sitemap_index(request):
    """Serve the master sitemap index listing every enabled variant."""
    return _xml_response(get_sitemap_index_xml(request))


@require_http_methods(["GET"])
def sitemap_variant(request, variant):
    """Serve a variant's sitemap: its listing when paginated, else its only page."""
    if variant == SITEMAP_INDEX_VARIANT:
        return sitemap_index(request)

    pages = _published_pages(request, variant)
    page = (
        pages.filter(delta=LISTING_DELTA).first() or pages.filter(delta=1).first()
    )
    if page is None:
        raise Http404(f"No sitemap has been generated for '{variant}'")
    return _xml_response(page.sitemap_string)


@require_http_methods(["GET"])
def sitemap_variant_page(request, variant, page):
    """Serve one numbered page of a paginated variant."""
    if page < 1:
        raise Http404("Sitemap pages start at 1")

    sitemap_page = _published_pages(request, variant).filter(delta=page).first()
    if sitemap_page is None:
        raise Http404(f"Sitemap page {page} of '{variant}' does not exist")
    return _xml_response(sitemap_page.sitemap_string)
