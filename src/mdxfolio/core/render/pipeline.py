"""Post body rendering: extended syntax, math extraction, math typesetting, components"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from mdxfolio.core.render.components import Component, components_plugin, default_components
from mdxfolio.core.render.mathml import MATH_NODE_TYPES, math_plugin


EXTENDED_RULES = ["table", "strikethrough"]


def _make_parser(extended: bool, math: bool, typeset_math: bool) -> MarkdownIt:
    """Build a MarkdownIt instance with the enabled passes, in their fixed order."""
    md = MarkdownIt("commonmark", options_update={"linkify": False})
    if extended:
        md.enable(EXTENDED_RULES)
    if math:
        md.use(math_plugin, typeset_math=typeset_math)
    md.use(components_plugin)
    return md


@dataclass
class RenderedDocument:
    """Render result: HTML plus the token stream it came from; never cached."""
    html:   str
    tokens: list = field(repr=False)   # markdown-it Token objects

    @property
    def tree(self) -> SyntaxTreeNode:
        return SyntaxTreeNode(self.tokens)

    def node_types(self) -> set[str]:
        return {node.type for node in self.tree.walk()}

    def find(self, node_type: str) -> list[SyntaxTreeNode]:
        return [node for node in self.tree.walk() if node.type == node_type]

    def math_nodes(self) -> list[SyntaxTreeNode]:
        return [node for node in self.tree.walk() if node.type in MATH_NODE_TYPES]


class Renderer:
    """Markdown renderer with three toggleable passes.

    extended:  GFM tables and ~~strikethrough~~
    math:      $inline$ and $$block$$ become math nodes; stray '$' is flagged
    typeset:   math nodes are converted to MathML (otherwise the TeX is kept escaped)

    components maps tag names to Component instances; it defaults to
    default_components(typeset), so <Math> follows the same typeset toggle as
    $...$, and can be extended per render() call.
    """

    def __init__(
        self,
        extended: bool = True,
        math: bool = True,
        typeset: bool = True,
        components: Optional[Mapping[str, Component]] = None,
        ):
        self.components = dict(default_components(typeset) if components is None else components)
        self.md = _make_parser(extended, math, typeset)

    def render(self, body: str, components: Optional[Mapping[str, Component]] = None) -> RenderedDocument:
        env = {"components": {**self.components, **(components or {})}}
        tokens = self.md.parse(body, env)
        return RenderedDocument(html=self.md.renderer.render(tokens, self.md.options, env), tokens=tokens)


def render(body: str, components: Optional[Mapping[str, Component]] = None) -> RenderedDocument:
    """Render body with every pass enabled and the default components plus components."""
    return Renderer().render(body, components)
