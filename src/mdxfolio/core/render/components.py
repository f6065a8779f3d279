"""Caller-supplied components for capitalized JSX-style tags in post bodies

A component is looked up by tag name in the map passed to the renderer:

    <Math display>{'\\int_0^1 x\\,dx'}</Math>
    <Note kind="tip" />

Attributes become props (a="s", a='s', a={expr}, bare a -> True) and the tag
body becomes props["children"]. Tags that are not in the map are left to
markdown-it's own HTML handling.
"""

import html
import re
from abc import ABC, abstractmethod
from typing import Any, Mapping, NamedTuple, Optional

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock
from markdown_it.rules_inline import StateInline

from mdxfolio.core.render.mathml import typeset


TAG_RE = re.compile(
    r'<(?P<name>[A-Z][\w.]*)'
    r'(?P<attrs>(?:\s+[^\s=/>]+(?:\s*=\s*(?:"[^"]*"|\'[^\']*\'|\{[^}]*\}))?)*)'
    r'\s*(?:/>|>(?P<children>.*?)</(?P=name)\s*>)',
    re.DOTALL,
)
ATTR_RE = re.compile(r'([^\s=/>]+)(?:\s*=\s*("[^"]*"|\'[^\']*\'|\{[^}]*\}))?')
JS_STRING_RE = re.compile(r'^(["\'`])(.*)\1$', re.DOTALL)


class Component(ABC):
    """Renders one custom tag to HTML."""

    @abstractmethod
    def render(self, props: dict[str, Any]) -> str:
        raise NotImplementedError


class MathComponent(Component):
    """<Math>{'E = mc^2'}</Math>, or <Math display>...</Math> for block layout."""

    def __init__(self, typeset_math: bool = True):
        self.typeset_math = typeset_math

    def render(self, props: dict[str, Any]) -> str:
        tex = str(props.get("children", ""))
        if self.typeset_math:
            body = typeset(tex, display=bool(props.get("display")))
        else:
            body = html.escape(tex)
        if props.get("display"):
            return f'<div class="math block">{body}</div>'
        return f'<span class="math inline">{body}</span>'


def default_components(typeset_math: bool = True) -> dict[str, Component]:
    """The built-in component map; Math leaves TeX source in place when typeset_math is off."""
    return {"Math": MathComponent(typeset_math)}


class ComponentMatch(NamedTuple):
    name:  str
    props: dict[str, Any]
    end:   int


def _js_value(expr: str) -> Any:
    """Evaluate the literal subset of a JSX expression; anything else stays a string."""
    expr = expr.strip()
    m = JS_STRING_RE.match(expr)
    if m:
        return re.sub(r'\\(.)', r'\1', m.group(2), flags=re.DOTALL)
    if expr in ("true", "false"):
        return expr == "true"
    for cast in (int, float):
        try:
            return cast(expr)
        except ValueError:
            pass
    return expr


def parse_props(attrs: str, children: Optional[str] = None) -> dict[str, Any]:
    props: dict[str, Any] = {}
    for name, raw in ATTR_RE.findall(attrs):
        if not raw:
            props[name] = True
        elif raw[0] == '{':
            props[name] = _js_value(raw[1:-1])
        else:
            props[name] = raw[1:-1]
    if children is not None:
        text = children.strip()
        props["children"] = _js_value(text[1:-1]) if text[:1] == '{' and text[-1:] == '}' else text
    return props


def match_component(src: str, pos: int, end: int, names: Mapping[str, Any]) -> ComponentMatch | None:
    """Match a complete known component tag starting exactly at pos."""
    m = TAG_RE.match(src, pos, end)
    if m is None or m.group("name") not in names:
        return None
    return ComponentMatch(m.group("name"), parse_props(m.group("attrs"), m.group("children")), m.end())


def _components(env) -> Mapping[str, Component]:
    return (env or {}).get("components") or {}


def component_inline(state: StateInline, silent: bool) -> bool:
    if state.src[state.pos] != '<':
        return False
    m = match_component(state.src, state.pos, state.posMax, _components(state.env))
    if m is None:
        return False
    if not silent:
        token = state.push("mdx_component", "", 0)
        token.meta = {"name": m.name, "props": m.props}
        token.content = state.src[state.pos:m.end]
    state.pos = m.end
    return True


def component_block(state: StateBlock, startLine: int, endLine: int, silent: bool) -> bool:
    """A known component that starts a line and ends its last line on its own."""
    if state.sCount[startLine] - state.blkIndent >= 4:
        return False
    start = state.bMarks[startLine] + state.tShift[startLine]
    if state.src[start:start + 1] != '<':
        return False
    m = match_component(state.src, start, len(state.src), _components(state.env))
    if m is None:
        return False
    line_end = state.src.find('\n', m.end)
    if line_end < 0:
        line_end = len(state.src)
    if state.src[m.end:line_end].strip():
        return False

    last = startLine
    while last < endLine and state.eMarks[last] < m.end:
        last += 1
    if last >= endLine:
        return False
    if silent:
        return True

    token = state.push("mdx_component", "", 0)
    token.block = True
    token.map = [startLine, last + 1]
    token.meta = {"name": m.name, "props": m.props}
    token.content = state.src[start:m.end]
    state.line = last + 1
    return True


def _render_component(self, tokens, idx, options, env) -> str:
    token = tokens[idx]
    component = _components(env).get(token.meta["name"])
    if component is None:
        return html.escape(token.content)
    out = component.render(dict(token.meta["props"]))
    return out + "\n" if token.block else out


def components_plugin(md: MarkdownIt) -> None:
    """Dispatch known component tags (from env["components"]) to their renderers."""
    md.block.ruler.before(
        "html_block", "mdx_component", component_block,
        {"alt": ["paragraph", "reference", "blockquote"]},
    )
    md.inline.ruler.before("html_inline", "mdx_component", component_inline)
    md.add_render_rule("mdx_component", _render_component)
