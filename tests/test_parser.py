from __future__ import annotations

import pytest

from vnscript.script.errors import InvalidArity, MalformedElement, MissingArgument, UnknownDirective
from vnscript.script.model import Comment, Dialogue, Jump, LoadBG
from vnscript.script.parser import (
    is_comment,
    is_dialogue,
    is_directive,
    parse_comment,
    parse_dialogue,
    parse_directive,
    split_arguments,
)


def test_hints():
    assert is_dialogue("[A] x")
    assert is_directive("@jump(x)")
    assert is_comment("# x")
    assert not is_dialogue("")
    assert not is_directive("jump(x)")


class TestDialogue:
    def test_stops_before_directive_line(self):
        src = "[Alice] Hello\n@loadbg(x)"
        dlg, end = parse_dialogue(src, 0)
        assert dlg == Dialogue("Alice", "Hello")
        assert src[end:].startswith("@loadbg")

    def test_name_trimmed_and_body_normalized(self):
        src = "[ Bob ]  line one\n   line   two\n# note"
        dlg, end = parse_dialogue(src, 0)
        assert dlg == Dialogue("Bob", "line one line two")
        assert src[end:] == "# note"

    def test_earliest_boundary_wins(self):
        src = "[A] one\n# c\n@loadbg(x)"
        dlg, end = parse_dialogue(src, 0)
        assert dlg.body == "one"
        assert src[end:].startswith("# c")

    def test_body_runs_to_end_without_boundary(self):
        src = "[A] one\ntwo"
        dlg, end = parse_dialogue(src, 0)
        assert dlg.body == "one two"
        assert end == len(src)

    def test_indented_marker_is_body_text(self):
        dlg, _ = parse_dialogue("[A] x\n  @loadbg(y)", 0)
        assert dlg.body == "x @loadbg(y)"

    def test_empty_body(self):
        dlg, _ = parse_dialogue("[A]\n@loadbg(y)", 0)
        assert dlg == Dialogue("A", "")

    def test_unterminated_name(self):
        with pytest.raises(MalformedElement) as ei:
            parse_dialogue("[Alice Hello\nworld", 0)
        err = ei.value
        assert err.expected == "']'"
        assert (err.line, err.column) == (1, 13)
        assert err.context == "[Alice Hello"

    def test_name_cannot_span_lines(self):
        with pytest.raises(MalformedElement):
            parse_dialogue("[Ali\nce] hi", 0)


class TestDirective:
    def test_plain_jump(self):
        d, end = parse_directive("@jump(next.vn)\n[A] x", 0)
        assert d == Jump(path="next.vn")
        assert end == len("@jump(next.vn)")

    def test_choice_jump_trims_arguments(self):
        src = "@jump( go left , go right , next.vn )"
        d, end = parse_directive(src, 0)
        assert d.choices == ("go left", "go right")
        assert d.path == "next.vn"
        assert end == len(src)

    def test_loadbg(self):
        d, _ = parse_directive("@loadbg(bg1.png)", 0)
        assert d == LoadBG("bg1.png")

    def test_loadbg_without_arguments(self):
        with pytest.raises(MissingArgument) as ei:
            parse_directive("@loadbg()", 0)
        assert ei.value.position == 0
        assert ei.value.role == "bg path"

    def test_loadbg_ignores_extra_arguments(self):
        d, _ = parse_directive("@loadbg(a.png, b.png)", 0)
        assert d == LoadBG("a.png")

    @pytest.mark.parametrize("args", ["", "a, b", "a, b, c, d"])
    def test_jump_bad_arity(self, args):
        with pytest.raises(InvalidArity):
            parse_directive(f"@jump({args})", 0)

    def test_unknown_directive(self):
        with pytest.raises(UnknownDirective) as ei:
            parse_directive("@sprite(hero.png)", 0)
        assert ei.value.name == "sprite"

    def test_directive_error_located_at_marker(self):
        src = "[A] hi\n@foo(x)"
        with pytest.raises(UnknownDirective) as ei:
            parse_directive(src, src.index("@"))
        assert (ei.value.line, ei.value.column) == (2, 1)

    def test_missing_name(self):
        with pytest.raises(MalformedElement) as ei:
            parse_directive("@(x)", 0)
        assert ei.value.expected == "directive name"

    def test_missing_open_paren(self):
        with pytest.raises(MalformedElement) as ei:
            parse_directive("@jump next.vn", 0)
        assert ei.value.expected == "'('"

    def test_missing_close_paren_before_break(self):
        with pytest.raises(MalformedElement) as ei:
            parse_directive("@jump(next.vn\n)", 0)
        assert ei.value.expected == "')'"
        assert ei.value.line == 1


def test_split_arguments():
    assert split_arguments("") == []
    assert split_arguments("   ") == []
    assert split_arguments(" a, ,b ") == ["a", "", "b"]


def test_comment_consumes_line_break():
    src = "# hi\n[A] x"
    c, end = parse_comment(src, 0)
    assert c == Comment()
    assert src[end:] == "[A] x"


def test_comment_at_end_of_input():
    c, end = parse_comment("# trailing", 0)
    assert c == Comment()
    assert end == len("# trailing")
