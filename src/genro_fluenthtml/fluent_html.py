# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FluentHtml - the basic concrete element."""

from __future__ import annotations

from typing import Any

from .element import FluentHtmlElement
from .factory import default_factory


@default_factory.register()
class FluentHtml(FluentHtmlElement):
    """A plain html element, also the base class for custom elements.

    Args:
        html_element_name: Element name like 'div', a producer returning
            one, or None to render only the contents.
        tag_contents: Contents to add, see with_content().
        tag_attributes: Attributes to set, see with_attribute().

    Example:
        >>> print(FluentHtml('p', 'Hello', {'class': 'greeting'}))
        <p class="greeting">Hello</p>
    """

    __slots__ = ()

    def __init__(
        self,
        html_element_name: Any = None,
        tag_contents: Any = None,
        tag_attributes: Any = None,
    ) -> None:
        super().__init__()
        self.with_html_element_name(html_element_name)
        self.with_content(tag_contents)
        self.with_attribute(tag_attributes)

    @classmethod
    def create(
        cls,
        html_element_name: Any = None,
        tag_contents: Any = None,
        tag_attributes: Any = None,
    ) -> FluentHtml:
        """Create a new element, to start a method chain on one line."""
        return FluentHtml(html_element_name, tag_contents, tag_attributes)
