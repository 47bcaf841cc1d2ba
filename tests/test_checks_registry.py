"""Tests for the built-in check table and the run_check boundary."""

from seoinspector.checks import (
    BUILTIN_ORDER,
    Check,
    canonical_name,
    get_builtin_checks,
    run_check,
)
from seoinspector.models import CheckResult, Document, Status


def test_builtins_in_fixed_order():
    assert tuple(get_builtin_checks()) == BUILTIN_ORDER


def test_builtins_satisfy_protocol():
    for name, check in get_builtin_checks().items():
        assert isinstance(check, Check)
        assert check.name == name


def test_builtin_table_is_a_copy():
    table = get_builtin_checks()
    table.pop("title")
    assert "title" in get_builtin_checks()


def test_canonical_name_lowercases_and_maps_aliases():
    assert canonical_name("  Title ") == "title"
    assert canonical_name("check_links") == "links"
    assert canonical_name("CHECK_HEADINGS") == "headings"
    assert canonical_name("check_structured_data") == "structured_data"


def test_run_check_returns_result():
    class GoodCheck:
        name = "good"
        def evaluate(self, document):
            return CheckResult("good", Status.OK, "fine")

    assert run_check(GoodCheck(), Document("")) == CheckResult("good", Status.OK, "fine")


def test_run_check_converts_fault_to_error():
    class BrokenCheck:
        name = "broken"
        def evaluate(self, document):
            raise RuntimeError("boom")

    result = run_check(BrokenCheck(), Document("<p>x</p>"))
    assert result.status == Status.ERROR
    assert result.name == "broken"
    assert result.notes == "RuntimeError: boom"


def test_run_check_converts_malformed_return_to_error():
    class SloppyCheck:
        name = "sloppy"
        def evaluate(self, document):
            return "ok"

    result = run_check(SloppyCheck(), Document(""))
    assert result.status == Status.ERROR
    assert result.notes.startswith("TypeError")


def test_run_check_keys_by_given_name():
    class Renamed:
        name = "Original"
        def evaluate(self, document):
            return {"status": "warn", "notes": "n"}

    result = run_check(Renamed(), Document(""), "registered")
    assert result == CheckResult("registered", Status.WARN, "n")


def test_builtins_total_on_malformed_html():
    doc = Document("<html><head><title>Broken<meta name=</head><body><a href=><img <h1>")
    for name, check in get_builtin_checks().items():
        result = run_check(check, doc, name)
        assert result.name == name
        assert result.status in set(Status)
