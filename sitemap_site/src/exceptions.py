"""
Base exceptions for the application.
"""

from typing import Any, Dict, Optional


class SitemapError(Exception):
    """Base exception for sitemap failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        """
        Args:
            message: Human-readable error message
            context: Additional context for logging (variant, page, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class UnknownVariantError(SitemapError):
    """Raised when a sitemap variant is not defined in SITEMAP_VARIANTS."""


class UnknownUrlGeneratorError(SitemapError):
    """Raised when no URL generator is registered under a plugin id."""


class MissingBaseUrlError(SitemapError):
    """Raised when absolute sitemap links are needed but no base URL is known."""
