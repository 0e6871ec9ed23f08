# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-FluentHtml - Fluent interface for building html element trees.

Elements are built with chained method calls, may hold deferred values
(callables evaluated at render time) and render to html with ``str()``.
"""

__version__ = "0.1.0"

from .element import FluentHtmlElement
from .exceptions import FluentHtmlError, InvalidArgumentError, RenderError
from .factory import ElementFactory, default_factory
from .fluent_html import FluentHtml
from .markup import (
    build_attributes_string,
    build_contents_string,
    build_html_element,
    flatten_attribute_value,
)
from .registrar import HtmlIdRegistrar, IdRegistrar

__all__ = [
    # Core classes
    "FluentHtml",
    "FluentHtmlElement",
    # Element creation
    "ElementFactory",
    "default_factory",
    # Id registrars
    "IdRegistrar",
    "HtmlIdRegistrar",
    # Markup
    "build_html_element",
    "build_contents_string",
    "build_attributes_string",
    "flatten_attribute_value",
    # Exceptions
    "FluentHtmlError",
    "InvalidArgumentError",
    "RenderError",
]
