"""Admin configuration for stored sitemap pages."""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import SitemapPage


@admin.register(SitemapPage)
class SitemapPageAdmin(admin.ModelAdmin):
    list_display = ["type", "delta", "status", "is_listing", "sitemap_created"]
    list_filter = ["type", "status"]
    search_fields = ["type"]
    ordering = ["type", "delta"]
    readonly_fields = ["sitemap_string", "sitemap_created"]

    fieldsets = (
        (None, {"fields": ("type", "delta", "status")}),
        (
            _("Content"),
            {"fields": ("sitemap_string", "sitemap_created"), "classes": ("collapse",)},
        ),
    )

    @admin.display(boolean=True, description=_("Listing"))
    def is_listing(self, obj):
        return obj.is_listing
