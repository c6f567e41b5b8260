"""Property-based tests for escaping and resolution laws."""

from hypothesis import given, settings
from hypothesis import strategies as st

from plumas import to_html, to_latex
from plumas.capture import capture
from plumas.nodes import Call, Literal
from plumas.safe import RawText, SafeFragment, concat, escape
from plumas.utils.text import escape_html_text, escape_latex

ESCAPERS = st.sampled_from([escape_html_text, escape_latex])

identifiers = st.from_regex(r"[a-z][a-z0-9]{0,8}", fullmatch=True)


class TestEscapeLaws:
    """Escaping never happens twice."""

    @given(st.text(max_size=200), ESCAPERS)
    @settings(max_examples=200)
    def test_idempotent(self, text: str, escaper) -> None:
        once = escape(text, escaper)
        assert escape(once, escaper) == once

    @given(st.text(max_size=200), ESCAPERS)
    @settings(max_examples=100)
    def test_safe_fragments_pass_through(self, text: str, escaper) -> None:
        fragment = SafeFragment(text)
        assert escape(fragment, escaper) is fragment

    @given(st.text(max_size=200), ESCAPERS)
    @settings(max_examples=100)
    def test_raw_text_matches_plain_string(self, text: str, escaper) -> None:
        assert escape(RawText(text), escaper) == escape(text, escaper)

    @given(st.lists(st.text(max_size=50), max_size=10))
    @settings(max_examples=100)
    def test_concat_keeps_fragments_verbatim(self, texts: list[str]) -> None:
        fragments = [SafeFragment(t) for t in texts]
        assert concat(fragments).text == "".join(texts)

    @given(st.text(max_size=200))
    @settings(max_examples=100)
    def test_html_text_has_no_raw_markup(self, text: str) -> None:
        escaped = escape_html_text(text)
        assert "<" not in escaped
        assert ">" not in escaped


class TestRenderLaws:
    """Properties of whole renders."""

    @given(st.text(max_size=100))
    @settings(max_examples=100)
    def test_literal_content_is_escaped_once(self, text: str) -> None:
        tree = Call.of("p", Literal(text))
        assert to_html(tree) == f"<p>{escape_html_text(text)}</p>"

    @given(identifiers)
    @settings(max_examples=100)
    def test_unknown_math_call_uses_fallback(self, name: str) -> None:
        tree = Call.of(f"zz{name}", Literal("a"))
        assert to_latex(tree) == f"\\mathrm{{zz{name}}}(a)"

    @given(st.sampled_from(["sin", "cos", "sqrt", "frac", "max"]))
    def test_operator_names_resolve_as_symbols(self, name: str) -> None:
        assert to_latex(capture(name)) == name
