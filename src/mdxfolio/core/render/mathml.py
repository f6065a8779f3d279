"""TeX math: MathML typesetting, error fallbacks, and unterminated delimiter flagging"""

import html
import logging
import re
from typing import Any
from xml.etree.ElementTree import Element

from latex2mathml.converter import convert, convert_to_element
from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token
from mdit_py_plugins.dollarmath import dollarmath_plugin


logger = logging.getLogger(__name__)

MATH_NODE_TYPES = ("math_inline", "math_inline_double", "math_block", "math_block_label")

ARITY = {
    "mfrac": 2, "mroot": 2, "msup": 2, "msub": 2, "msubsup": 3,
    "mover": 2, "munder": 2, "munderover": 3,
}
UNKNOWN_COMMAND_RE = re.compile(r"^\\[A-Za-z]+$")


class InvalidMathError(ValueError):
    """TeX that converts without an exception but to malformed MathML."""


def math_error(source: str, reason: str) -> str:
    """Visible in-place fallback for math that could not be rendered."""
    return f'<span class="math-error" title="{html.escape(reason)}">{html.escape(source)}</span>'


def check_mathml(root: Element) -> None:
    """Raise InvalidMathError for undefined control sequences or missing arguments."""
    for el in root.iter():
        if el.tag in ("mi", "mo") and el.text and UNKNOWN_COMMAND_RE.match(el.text):
            raise InvalidMathError(f"Undefined control sequence {el.text}")
        expected = ARITY.get(el.tag)
        if expected is not None and len(el) != expected:
            raise InvalidMathError(f"Missing argument in <{el.tag}>")


def typeset(latex: str, display: bool = False) -> str:
    """Convert TeX to MathML, or return a math_error() span if the TeX is invalid."""
    mode = "block" if display else "inline"
    try:
        mathml = convert(latex, display=mode)
        check_mathml(convert_to_element(latex, display=mode))
    except Exception as e:  # latex2mathml raises assorted builtin and custom errors
        reason = str(e) or type(e).__name__
        logger.warning("Could not typeset %r: %s", latex, reason)
        return math_error(latex, f"Invalid TeX: {reason}")
    return mathml


def _dollarmath_renderer(content: str, options: dict[str, Any]) -> str:
    return typeset(content, display=options.get("display_mode", False))


def flag_unterminated(state: StateCore) -> None:
    """Turn text from a stray '$' to the end of its text run into a math_unterminated token.

    Runs straight after inline parsing, so escaped dollars are still separate
    text_special tokens and are left alone.
    """
    for token in state.tokens:
        if token.type != "inline" or not token.children:
            continue
        children: list[Token] = []
        for child in token.children:
            pos = child.content.find("$") if child.type == "text" else -1
            if pos < 0:
                children.append(child)
                continue
            if pos:
                before = Token("text", "", 0)
                before.content = child.content[:pos]
                before.level = child.level
                children.append(before)
            flagged = Token("math_unterminated", "", 0)
            flagged.content = child.content[pos:]
            flagged.markup = "$"
            flagged.level = child.level
            children.append(flagged)
        token.children = children


def _render_unterminated(self, tokens, idx, options, env) -> str:
    return math_error(tokens[idx].content, "Unterminated math delimiter")


def math_plugin(md: MarkdownIt, typeset_math: bool = True) -> None:
    """Math extraction ($...$, $$...$$) and, when typeset_math is set, MathML rendering."""
    md.use(dollarmath_plugin, renderer=_dollarmath_renderer if typeset_math else None)
    md.core.ruler.after("inline", "math_unterminated", flag_unterminated)
    md.add_render_rule("math_unterminated", _render_unterminated)
