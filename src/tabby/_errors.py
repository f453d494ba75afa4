"""Tabby error hierarchy.

All tabby-specific errors inherit from TabbyError for easy catching.
"""


class TabbyError(Exception):
    """Base error for all tabby operations."""


class ConfigError(TabbyError):
    """Invalid or missing configuration (settings, route modules, bundles)."""


class EmbedError(TabbyError):
    """Build-time embedding failed. No bundle was produced."""


class ExportError(TabbyError):
    """Error during static export."""
