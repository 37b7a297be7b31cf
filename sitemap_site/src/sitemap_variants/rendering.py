"""XML serialization of sitemap indexes."""

from xml.sax.saxutils import escape

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


def render_sitemap_index(urls) -> str:
    """
    Render a <sitemapindex> document.

    Args:
        urls: Iterable of {"url": ..., "lastmod": ...} records. lastmod may
            be empty, in which case the element is omitted.

    Returns:
        XML document as a string
    """
    sitemap = '<?xml version="1.0" encoding="UTF-8"?>\n'
    sitemap += f'<sitemapindex xmlns="{SITEMAP_NAMESPACE}">\n'

    for entry in urls:
        sitemap += "  <sitemap>\n"
        sitemap += f"    <loc>{escape(str(entry['url']))}</loc>\n"
        if entry.get("lastmod"):
            sitemap += f"    <lastmod>{escape(entry['lastmod'])}</lastmod>\n"
        sitemap += "  </sitemap>\n"

    sitemap += "</sitemapindex>"
    return sitemap
