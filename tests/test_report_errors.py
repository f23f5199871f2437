import pytest

from ctraits.errors import ERR, REGISTRY, Category, Severity, _add, _fmt, emit
from ctraits.report import Reporter, Span


def test_codes_are_registered_once():
    assert ERR.CT0004.category is Category.TYPE
    assert ERR["CT0100"].severity is Severity.WARNING
    with pytest.raises(ValueError):
        _add(REGISTRY["CT0001"])


def test_unknown_code():
    with pytest.raises(AttributeError):
        ERR.CT9999


def test_missing_format_key_is_named():
    with pytest.raises(KeyError, match="specifiers"):
        _fmt("CT0004", text="unsigned double x")


def test_emit_uses_registered_severity():
    r = Reporter()
    emit(r, ERR.CT0201, None, name="p")
    assert r.has_warnings
    assert not r.has_errors
    emit(r, ERR.CT0006, Span(1, 6, 1, 6), "void v[3]", text="void v[3]")
    assert r.has_errors


def test_ascii_format():
    r = Reporter(label="argv[1]")
    r.error("CT0002", "unexpected '@'", Span(1, 5, 1, 5), "int @")
    assert r.format(use_color=False, use_unicode=False) == (
        "argv[1]:5: error [CT0002]: unexpected '@'.\n"
        "  | int @\n"
        "  `     ^"
    )


def test_diagnostic_without_span_is_one_line():
    r = Reporter()
    r.warn("CT0201", "'p' has no reliable size information", None)
    assert r.format(use_color=False, use_unicode=False) == (
        "<decl>: warning [CT0201]: 'p' has no reliable size information."
    )


def test_unicode_format_marks_the_column():
    r = Reporter()
    r.error("CT0002", "unexpected '@'", Span(1, 5, 1, 5), "int @")
    lines = r.format(use_color=False, use_unicode=True).splitlines()
    assert lines[0].endswith("<decl>:5: error [CT0002]: unexpected '@'.")
    assert lines[1] == "  │  int @"
    assert lines[2] == "  │      ┯"


def test_print_honours_no_color(monkeypatch, capsys):
    monkeypatch.setenv("NO_COLOR", "1")
    r = Reporter()
    r.warn("CT0201", "no size", None)
    r.print()
    assert "\x1b[" not in capsys.readouterr().err
