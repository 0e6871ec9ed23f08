# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FluentHtml exceptions."""

from __future__ import annotations


class FluentHtmlError(Exception):
    """Base exception for FluentHtml errors."""

    pass


class InvalidArgumentError(FluentHtmlError, ValueError):
    """Raised when an operation receives an argument it cannot work with.

    Used for empty desired ids and for companion element names that no
    factory in the tree can resolve.
    """

    pass


class RenderError(FluentHtmlError):
    """Raised when an element fails to render and is set to raise on error."""

    pass
