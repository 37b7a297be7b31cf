"""
Celery tasks for sitemap_site.
"""
