"""Exception hierarchy for seoinspector.

SeoInspectorError is the root. All exceptions inherit from it so callers
can catch broad categories or specific types.

Unknown check names are not errors: they produce an ``unknown`` result.
Faults inside a single check are not raised either: they become an
``error`` result at the check boundary.
"""


class SeoInspectorError(Exception):
    """Root exception for the entire project."""


# --- Shared errors ---


class ConfigError(SeoInspectorError):
    """Configuration errors: invalid config values, unknown output format."""


class FetchError(SeoInspectorError):
    """Page acquisition failures: network errors, non-success HTTP status."""


class NoSourceError(FetchError):
    """No document was supplied and no URL is known to fetch one from."""


# --- Plugin errors ---


class PluginError(SeoInspectorError):
    """Base for all plugin errors."""


class PluginLoadError(PluginError):
    """A candidate could not be imported, instantiated, or breaks the plugin contract."""


class PluginDiscoveryError(PluginError):
    """Discovery could not reach any of its search locations."""
