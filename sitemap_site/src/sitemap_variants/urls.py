"""URLs for sitemaps - mounted outside any language prefix."""

from django.urls import path

from . import views

urlpatterns = [
    # Sitemap index (lists all enabled variant sitemaps)
    path("sitemap.xml", views.sitemap_index, name="sitemap_index"),
    path("<slug:variant>/sitemap.xml", views.sitemap_variant, name="sitemap_variant"),
    path(
        "<slug:variant>/sitemap-<int:page>.xml",
        views.sitemap_variant_page,
        name="sitemap_variant_page",
    ),
]
