"""Plugins bundled with seoinspector. Every submodule here is a discovery candidate."""
