"""Tests for man2mdoc.passes.simple module."""
from datetime import date

from man2mdoc.config import ConvertConfig
from man2mdoc.document import Document
from man2mdoc.passes.simple import format_dd_date, simple

CFG = ConvertConfig(today=date(2026, 10, 9))


def _simple(lines: list[str]) -> list[str]:
    doc = Document(lines)
    simple(doc, CFG)
    return doc.lines()


class TestRenames:
    def test_headers(self) -> None:
        assert _simple([".SH DESCRIPTION\n", ".SS Sub\n", ".DT x\n"]) == [
            ".Sh DESCRIPTION\n",
            ".Ss Sub\n",
            ".Dt x\n",
        ]

    def test_sp_deleted(self) -> None:
        doc = Document(["a\n", ".sp\n", ".sp\n", "b\n"])
        assert simple(doc, CFG) == 2
        assert doc.lines() == ["a\n", "b\n"]

    def test_lp_after_heading_deleted(self) -> None:
        assert _simple([".SH NAME\n", ".LP\n", "text\n", ".LP\n", "more\n"]) == [
            ".Sh NAME\n",
            "text\n",
            ".Pp\n",
            "more\n",
        ]

    def test_pp_after_subsection_deleted(self) -> None:
        assert _simple([".SS Notes\n", ".PP\n", "x\n"]) == [".Ss Notes\n", "x\n"]

    def test_lp_at_top_renamed(self) -> None:
        assert _simple([".LP\n", "x\n"]) == [".Pp\n", "x\n"]

    def test_unterminated_lp(self) -> None:
        assert _simple(["x\n", ".LP"]) == ["x\n", ".Pp"]

    def test_te_hint_removed(self) -> None:
        assert _simple(["'\\\" te\n", ".SH NAME\n"]) == [".Sh NAME\n"]

    def test_repeated_te_hints_removed(self) -> None:
        src = ["'\\\" te\n", "'\\\" te\n", ".SH NAME\n"]
        assert _simple(src) == [".Sh NAME\n"]

    def test_te_hint_only_on_first_line(self) -> None:
        src = ["x\n", "'\\\" te\n"]
        assert _simple(src) == src


class TestTitle:
    def test_th_expanded(self) -> None:
        assert _simple([".TH LS 1 \"Jan 1, 2020\" SunOS\n", ".SH NAME\n"]) == [
            ".Dd Oct  9, 2026\n",
            ".Dt LS 1\n",
            ".Os\n",
            ".Sh NAME\n",
        ]

    def test_short_th_left_alone(self) -> None:
        assert _simple([".TH LS 1\n"]) == [".TH LS 1\n"]

    def test_format_dd_date(self) -> None:
        assert format_dd_date(date(2026, 10, 19)) == "Oct 19, 2026"
        assert format_dd_date(date(2026, 1, 2)) == "Jan  2, 2026"


def test_idempotent() -> None:
    src = [
        "'\\\" te\n",
        "'\\\" te\n",
        ".TH FOO 3C \"1 Jan 2020\"\n",
        ".SH NAME\n",
        ".LP\n",
        "foo\n",
        ".sp\n",
        ".SS Details\n",
        ".PP\n",
        "text\n",
        ".LP\n",
        ".TH SHORT 1\n",
        ".DT x\n",
    ]
    once = _simple(src)
    twice = _simple(once)
    assert twice == once
    assert not any(
        line.startswith((".SH", ".SS", ".DT", ".sp", ".LP", ".PP")) for line in once
    )
