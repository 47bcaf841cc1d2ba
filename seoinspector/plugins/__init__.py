"""Extensibility: externally supplied checks, discovered at runtime."""

from .protocol import PLUGIN_ATTR, Plugin, plugin_identity, validate_plugin
from .registry import PluginLoadFailure, PluginRegistry, instantiate

__all__ = [
    "PLUGIN_ATTR",
    "Plugin",
    "PluginLoadFailure",
    "PluginRegistry",
    "instantiate",
    "plugin_identity",
    "validate_plugin",
]
