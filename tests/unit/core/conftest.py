"""Shared fixtures for core unit tests"""

import pytest

from mdxfolio.core.render.pipeline import Renderer


SAMPLE_BODY = """\
# Heading

A paragraph with **bold** text and ~~struck~~ words.

| a | b |
|---|---|
| 1 | 2 |

Inline math $x^2$ and block math:

$$
\\int_0^1 x\\,dx
$$
"""


@pytest.fixture(name="renderer")
def renderer_fixture():
    return Renderer()


@pytest.fixture(name="sample_body")
def sample_body_fixture():
    return SAMPLE_BODY
