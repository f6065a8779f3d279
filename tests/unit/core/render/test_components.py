"""Unit tests for core/render/components.py"""

from typing import Any

import pytest

from mdxfolio.core.render.components import (
    Component,
    MathComponent,
    default_components,
    match_component,
    parse_props,
)
from mdxfolio.core.render.pipeline import Renderer


class Note(Component):
    def render(self, props: dict[str, Any]) -> str:
        return f'<aside class="{props.get("kind", "note")}">{props.get("children", "")}</aside>'


def test_parse_props_forms():
    props = parse_props(' kind="tip" label=\'x\' count={3} flag on={false}')
    assert props == {"kind": "tip", "label": "x", "count": 3, "flag": True, "on": False}


def test_parse_props_children_string_expression():
    assert parse_props("", "{'\\\\int_0^1 x'}")["children"] == "\\int_0^1 x"
    assert parse_props("", "  plain text ")["children"] == "plain text"


def test_match_component_requires_known_name():
    src = "<Note kind=\"tip\" />"
    assert match_component(src, 0, len(src), {}) is None
    m = match_component(src, 0, len(src), {"Note": Note()})
    assert m.name == "Note"
    assert m.props == {"kind": "tip"}
    assert m.end == len(src)


def test_inline_component_dispatch():
    doc = Renderer().render("See <Note kind=\"tip\">this</Note> now.\n", {"Note": Note()})
    [node] = doc.find("mdx_component")
    assert node.meta["name"] == "Note"
    assert '<p>See <aside class="tip">this</aside> now.</p>' in doc.html


def test_block_component_dispatch():
    body = "Intro.\n\n<Note kind=\"warn\">\nCareful\n</Note>\n\nOutro.\n"
    doc = Renderer().render(body, {"Note": Note()})
    assert '<aside class="warn">Careful</aside>\n' in doc.html
    assert "<p>Outro.</p>" in doc.html


def test_self_closing_block_component():
    doc = Renderer(components={"Note": Note()}).render("<Note />\n")
    assert doc.html == '<aside class="note"></aside>\n'


def test_unknown_component_left_as_html():
    doc = Renderer().render("Hi <Widget /> there.\n")
    assert doc.find("mdx_component") == []
    assert "<Widget />" in doc.html


def test_default_math_component():
    assert isinstance(default_components()["Math"], MathComponent)
    doc = Renderer().render("Energy <Math>{'E = mc^2'}</Math>.\n")
    assert '<span class="math inline"><math' in doc.html


def test_math_component_display():
    html = MathComponent().render({"children": "x", "display": True})
    assert html.startswith('<div class="math block"><math')


@pytest.mark.parametrize("components", [None, {}])
def test_renderer_without_extra_components(components):
    doc = Renderer().render("text\n", components)
    assert doc.html == "<p>text</p>\n"


def test_math_component_untypeset_keeps_tex():
    html = MathComponent(typeset_math=False).render({"children": "a < b", "display": True})
    assert html == '<div class="math block">a &lt; b</div>'


def test_renderer_typeset_off_applies_to_math_component():
    """<Math> keeps its TeX source like $...$ when typesetting is off."""
    doc = Renderer(typeset=False).render("Inline $x^2$ and <Math>{'E = mc^2'}</Math>.\n")
    assert "<math" not in doc.html
    assert '<span class="math inline">E = mc^2</span>' in doc.html
