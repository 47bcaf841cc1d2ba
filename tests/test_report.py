"""Tests for report merging, summarizing and rendering."""

import json
import logging

import pytest

from seoinspector.core.errors import ConfigError
from seoinspector.models import CheckResult, OutputFormat, Status
from seoinspector.report import as_mapping, merge_results, render, summarize

BUILTIN = [
    CheckResult("title", Status.OK, "Example Domain"),
    CheckResult("canonical", Status.WARN, "missing canonical link"),
]
PLUGIN = {
    "title": CheckResult("title", Status.ERROR, "plugin opinion"),
    "brand": CheckResult("brand", Status.OK, "logo found"),
}


def test_as_mapping_from_sequence():
    mapping = as_mapping(BUILTIN)
    assert list(mapping) == ["title", "canonical"]
    assert mapping["title"] is BUILTIN[0]


def test_merge_builtin_wins_collision(caplog):
    with caplog.at_level(logging.WARNING, logger="seoinspector.report"):
        merged = merge_results(BUILTIN, PLUGIN)
    assert list(merged) == ["title", "canonical", "brand"]
    assert merged["title"] == BUILTIN[0]
    assert "Dropping plugin result 'title'" in caplog.text


def test_merge_does_not_mutate_inputs():
    plugin = dict(PLUGIN)
    merge_results(BUILTIN, plugin)
    assert plugin == PLUGIN


def test_summarize_counts_every_status():
    counts = summarize(merge_results(BUILTIN, PLUGIN))
    assert counts == {"ok": 2, "warn": 1, "missing": 0, "error": 0, "unknown": 0}


def test_render_text_sorted_lines():
    text = render(merge_results(BUILTIN, PLUGIN))
    assert text.splitlines() == [
        "[ok] brand: logo found",
        "[warn] canonical: missing canonical link",
        "[ok] title: Example Domain",
    ]


def test_render_structured_is_serializable():
    structured = render(BUILTIN, OutputFormat.STRUCTURED)
    assert structured == {
        "canonical": {"name": "canonical", "status": "warn", "notes": "missing canonical link"},
        "title": {"name": "title", "status": "ok", "notes": "Example Domain"},
    }
    assert json.loads(json.dumps(structured)) == structured


def test_render_json_string():
    assert json.loads(render(BUILTIN, "json"))["title"]["status"] == "ok"


def test_render_empty_report():
    assert render([]) == ""
    assert render({}, "structured") == {}


def test_render_unknown_format():
    with pytest.raises(ConfigError):
        render(BUILTIN, "yaml")


def test_render_error_report():
    report = {"error": "Fetch failed: 503 Service Unavailable"}
    assert render(report) == "[error] error: Fetch failed: 503 Service Unavailable"
    assert render(report, "structured") == report
    assert json.loads(render(report, "json")) == report
