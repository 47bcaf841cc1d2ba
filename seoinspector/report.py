"""Report aggregation and rendering.

A report is either map-shaped (identity -> CheckResult, insertion order is
aggregation order) or sequence-shaped (list of CheckResult). Every function
here accepts both.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from typing import Any, Iterable, Mapping, Union

from seoinspector.core.errors import ConfigError
from seoinspector.models import CheckResult, OutputFormat, Status

logger = logging.getLogger(__name__)

Report = Union[Mapping[str, CheckResult], Iterable[CheckResult]]


def as_mapping(report: Report) -> dict[str, CheckResult]:
    """Normalize a sequence-shaped report to identity -> CheckResult."""
    if isinstance(report, Mapping):
        return dict(report)
    return {result.name: result for result in report}


def merge_results(
    builtin: Report,
    plugin: Report,
) -> dict[str, CheckResult]:
    """Merge built-in and plugin results into one keyed report.

    Built-in entries first, then plugin entries. A plugin entry whose
    identity is already present is dropped: the built-in wins.
    """
    merged = as_mapping(builtin)
    for name, result in as_mapping(plugin).items():
        if name in merged:
            logger.warning("Dropping plugin result '%s': a built-in check has that name", name)
            continue
        merged[name] = result
    return merged


def is_error_report(report: Any) -> bool:
    """True for the ``{"error": message}`` shape a failed fetch yields."""
    return (
        isinstance(report, Mapping)
        and list(report) == ["error"]
        and isinstance(report["error"], str)
    )


def summarize(report: Report) -> dict[str, int]:
    """Count results per status, every status present (zero when unused)."""
    counts = Counter(result.status for result in as_mapping(report).values())
    return {status.value: counts.get(status, 0) for status in Status}


def render(report: Report, fmt: Union[OutputFormat, str] = OutputFormat.TEXT) -> Any:
    """Render a report.

    text: ``[status] name: notes`` lines in sorted identity order.
    structured: JSON-serializable ``{name: {"name", "status", "notes"}}``.
    json: the structured form dumped to a string.

    An error-shaped report renders as one ``[error] error: message`` line
    in text mode and as the mapping itself otherwise.

    Raises:
        ConfigError: If ``fmt`` is not a known output format.
    """
    try:
        fmt = OutputFormat(fmt)
    except ValueError as e:
        raise ConfigError(f"Unknown output format: {fmt!r}") from e

    if is_error_report(report):
        if fmt == OutputFormat.TEXT:
            return f"[{Status.ERROR.value}] error: {report['error']}"
        if fmt == OutputFormat.JSON:
            return json.dumps(dict(report), indent=2)
        return dict(report)

    results = as_mapping(report)
    if fmt == OutputFormat.TEXT:
        return "\n".join(results[name].to_line() for name in sorted(results))

    structured = {name: results[name].to_dict() for name in sorted(results)}
    if fmt == OutputFormat.JSON:
        return json.dumps(structured, indent=2)
    return structured
