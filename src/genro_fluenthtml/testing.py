# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Helpers for comparing rendered html in tests.

Rendered html has newlines in places that depend on content length, so
comparisons are made on a normalised form where tags are separated by a
space and every whitespace run is a single space.

Example:
    >>> comparable_html('<div>\\n<p>Text</p></div>')
    '<div> <p>Text</p> </div>'
"""

from __future__ import annotations

import re
from typing import Any

from .element import FluentHtmlElement

_ADJACENT_TAGS = re.compile(r'><')
_WHITESPACE = re.compile(r'\s+')


def comparable_html(html: Any) -> str:
    """Return html normalised for comparison, rendering elements first."""
    html = _ADJACENT_TAGS.sub('> <', str(html))
    return _WHITESPACE.sub(' ', html)


def assert_html_equals(expected: str, element: FluentHtmlElement, message: str | None = None) -> None:
    """Assert that the element's whole tree renders as the expected html.

    Raises:
        AssertionError: If the normalised html differs.
    """
    actual = comparable_html(element)
    if comparable_html(expected) != actual:
        raise AssertionError(
            f"{message or 'FluentHtml not matching HTML string'}\n"
            f"expected: {comparable_html(expected)!r}\n"
            f"actual:   {actual!r}"
        )


def assert_html_content_equals(
    expected: str, element: FluentHtmlElement, message: str | None = None
) -> None:
    """Assert that the element's contents render as the expected html.

    The element name is removed from the element before rendering, so only
    its contents are compared.

    Raises:
        AssertionError: If the normalised html differs.
    """
    element.with_html_element_name(None)
    actual = comparable_html(element.to_html())
    if comparable_html(expected) != actual:
        raise AssertionError(
            f"{message or 'FluentHtml contents not matching HTML string'}\n"
            f"expected: {comparable_html(expected)!r}\n"
            f"actual:   {actual!r}"
        )
