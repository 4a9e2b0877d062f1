"""Tests for the cross-reference and substitution passes."""
from man2mdoc.config import ConvertConfig
from man2mdoc.document import Document
from man2mdoc.passes.common import SkipTracker, isolate_span
from man2mdoc.passes.substitute import substitutions
from man2mdoc.passes.xref import cross_references


def _xref(lines: list[str]) -> tuple[list[str], int]:
    doc = Document(lines)
    count = cross_references(doc, ConvertConfig())
    return doc.lines(), count


class TestCrossReferences:
    def test_reference_mid_sentence(self) -> None:
        lines, count = _xref(["See \\fBfoo\\fR(3C) for details.\n"])
        assert lines == ["See \n", ".Xr foo 3C\n", "for details.\n"]
        assert count == 1

    def test_trailing_comma_reattached(self) -> None:
        lines, _ = _xref(["Use \\fBopen\\fR(2), then close.\n"])
        assert lines == ["Use \n", ".Xr open 2 ,\n", "then close.\n"]

    def test_several_delimiters(self) -> None:
        lines, _ = _xref(["(see \\fBfoo\\fR(1)).\n"])
        assert lines == ["(see \n", ".Xr foo 1 ) .\n"]

    def test_reference_at_line_start(self) -> None:
        lines, _ = _xref(["\\fBls\\fR(1) lists files\n"])
        assert lines == [".Xr ls 1\n", "lists files\n"]

    def test_whole_line_reference(self) -> None:
        lines, _ = _xref(["\\fBls\\fR(1)\n"])
        assert lines == [".Xr ls 1\n"]

    def test_two_references_on_one_line(self) -> None:
        lines, count = _xref(["\\fBa\\fR(1) and \\fBb\\fR(2)\n"])
        assert lines == [".Xr a 1\n", "and \n", ".Xr b 2\n"]
        assert count == 2

    def test_italic_section(self) -> None:
        lines, _ = _xref(["\\fBopen\\fR(\\fI2\\fR)\n"])
        assert lines == [".Xr open 2\n"]

    def test_skip_region_untouched(self) -> None:
        src = [".nf\n", "\\fBfoo\\fR(1) here\n", ".fi\n", "\\fBbar\\fR(1)\n"]
        lines, count = _xref(src)
        assert lines[:3] == src[:3]
        assert lines[3] == ".Xr bar 1\n"
        assert count == 1

    def test_macro_line_untouched(self) -> None:
        src = [".B \\fBfoo\\fR(1)\n"]
        lines, count = _xref(src)
        assert lines == src
        assert count == 0


class TestSubstitutions:
    def test_symbol(self) -> None:
        cfg = ConvertConfig()
        cfg.add_rule("symbol", "O_RDONLY")
        doc = Document(["Pass \\fBO_RDONLY\\fR to open.\n"])
        assert substitutions(doc, cfg) == 1
        assert doc.lines() == ["Pass \n", ".Sy O_RDONLY\n", "to open.\n"]

    def test_leftmost_rule_wins(self) -> None:
        cfg = ConvertConfig()
        cfg.add_rule("define", "NULL")
        cfg.add_rule("type", "size_t")
        doc = Document(["a \\fIsize_t\\fR or \\fBNULL\\fR.\n"])
        assert substitutions(doc, cfg) == 2
        assert doc.lines() == ["a \n", ".Vt size_t\n", "or \n", ".Dv NULL .\n"]

    def test_variable(self) -> None:
        cfg = ConvertConfig()
        cfg.add_rule("variable", "errno")
        doc = Document(["\\fIerrno\\fP is set\n"])
        substitutions(doc, cfg)
        assert doc.lines() == [".Va errno\n", "is set\n"]

    def test_wrong_font_not_matched(self) -> None:
        cfg = ConvertConfig()
        cfg.add_rule("variable", "errno")
        doc = Document(["\\fBerrno\\fR is set\n"])
        assert substitutions(doc, cfg) == 0

    def test_no_rules(self) -> None:
        doc = Document(["\\fBx\\fR\n"])
        assert substitutions(doc, ConvertConfig()) == 0
        assert doc.lines() == ["\\fBx\\fR\n"]

    def test_macro_and_skip_lines_untouched(self) -> None:
        cfg = ConvertConfig()
        cfg.add_rule("symbol", "X")
        src = [".B \\fBX\\fR\n", ".Bd -literal\n", "\\fBX\\fR\n", ".Ed\n"]
        doc = Document(src)
        assert substitutions(doc, cfg) == 0
        assert doc.lines() == src


class TestIsolateSpan:
    def test_tab_after_delimiter_skipped(self) -> None:
        doc = Document(["x SPAN;\tmore\n"])
        placed = isolate_span(doc, 0, 2, 6)
        assert placed.index == 1
        assert placed.suffix == " ;"
        assert doc.lines() == ["x \n", "SPAN;\t\n", "more\n"]

    def test_whitespace_prefix_is_not_split(self) -> None:
        doc = Document(["  SPAN\n"])
        placed = isolate_span(doc, 0, 2, 6)
        assert placed.index == 0
        assert doc.lines() == ["  SPAN\n"]


class TestSkipTracker:
    def test_nf_fi(self) -> None:
        skip = SkipTracker()
        flags = [skip.update(x) for x in ["a\n", ".nf\n", "b\n", ".fi\n", "c\n"]]
        assert flags == [False, True, True, True, False]

    def test_bd_closed_only_by_ed(self) -> None:
        skip = SkipTracker()
        seq = [".Bd -literal\n", ".fi\n", "x\n", ".Ed\n", "y\n"]
        assert [skip.update(x) for x in seq] == [True, True, True, True, False]
        assert skip.closer is None

    def test_similar_request_names_ignored(self) -> None:
        skip = SkipTracker()
        assert skip.update(".nfoo\n") is False
        assert skip.closer is None
