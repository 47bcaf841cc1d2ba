"""Inspector configuration.

Composes all sub-configs. Each component receives the relevant slice.
Uses field(default_factory=...) for nested defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from seoinspector.core.config import FetchConfig
from seoinspector.core.errors import ConfigError
from seoinspector.models import OutputFormat, PluginOrder

DEFAULT_PLUGIN_PACKAGE = "seoinspector.plugins.contrib"
DEFAULT_ENTRY_POINT_GROUP = "seoinspector.plugins"


@dataclass(frozen=True)
class PluginConfig:
    """Where plugins are discovered and how they are ordered.

    Each location is either a dotted package name (every submodule is a
    candidate) or a filesystem directory (every ``*.py`` file is a candidate).
    """

    locations: tuple[str, ...] = (DEFAULT_PLUGIN_PACKAGE,)
    use_entry_points: bool = True
    entry_point_group: str = DEFAULT_ENTRY_POINT_GROUP
    order: PluginOrder = PluginOrder.SORTED

    def __post_init__(self) -> None:
        object.__setattr__(self, "locations", tuple(str(loc) for loc in self.locations))
        try:
            object.__setattr__(self, "order", PluginOrder(self.order))
        except ValueError as e:
            raise ConfigError(f"Unknown plugin order: {self.order!r}") from e

    def with_locations(self, *extra: str) -> "PluginConfig":
        """Copy with ``extra`` locations appended, skipping ones already present."""
        merged = list(self.locations)
        for loc in extra:
            if str(loc) not in merged:
                merged.append(str(loc))
        return PluginConfig(
            locations=tuple(merged),
            use_entry_points=self.use_entry_points,
            entry_point_group=self.entry_point_group,
            order=self.order,
        )


@dataclass(frozen=True)
class InspectorConfig:
    """Top-level configuration for an Inspector.

    run_all_includes_plugins: False runs only the built-in checks in their
    fixed order. True appends every non-colliding plugin after them, in
    ``plugins.order``.
    """

    eager_plugins: bool = True
    run_all_includes_plugins: bool = False
    max_workers: int = 1
    output_format: OutputFormat = OutputFormat.TEXT

    fetch: FetchConfig = field(default_factory=FetchConfig)
    plugins: PluginConfig = field(default_factory=PluginConfig)

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ConfigError(f"max_workers must be at least 1, got {self.max_workers}")
        try:
            object.__setattr__(self, "output_format", OutputFormat(self.output_format))
        except ValueError as e:
            raise ConfigError(f"Unknown output format: {self.output_format!r}") from e
