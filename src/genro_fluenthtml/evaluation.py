# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Deferred value evaluation.

Attributes, contents, element names and display conditions can all be
given as plain values, as callables producing values, or as containers
mixing both. Nothing is resolved until it is needed (usually at render
time), then :func:`evaluate` resolves the whole structure recursively.

Example:
    >>> evaluate(lambda: ['a', lambda: 'b'])
    ['a', 'b']
    >>> evaluate({'class': lambda el: el}, context='ctx')
    {'class': 'ctx'}
"""

from __future__ import annotations

import inspect
from collections.abc import Iterable, Mapping
from typing import Any


def is_container(value: Any) -> bool:
    """True if value should be treated as a collection of values.

    Strings, bytes and objects rendering their own markup (``__html__``)
    are never containers, even though some of them are iterable.
    """
    if isinstance(value, (str, bytes, bytearray)):
        return False
    if hasattr(value, '__html__'):
        return False
    return isinstance(value, (Mapping, Iterable))


def use_as_callable(value: Any) -> bool:
    """True if value is a producer to invoke rather than a value to keep.

    Strings, classes and containers are never invoked, even if callable.
    """
    if isinstance(value, (str, type)):
        return False
    if is_container(value):
        return False
    return callable(value)


def _accepts_context(func: Any) -> bool:
    """Check if a producer takes a positional argument for the context."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return True
    for param in signature.parameters.values():
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        ):
            return True
    return False


def evaluate(value: Any, context: Any = None) -> Any:
    """Recursively evaluate a deferred value.

    Args:
        value: Plain value, producer, or (nested) container of those.
        context: Passed as the only argument to producers that accept one,
            usually the element the value belongs to. When None, producers
            are called without arguments.

    Returns:
        The resolved value, guaranteed not to be a producer. Mappings come
        back as new dicts with the same keys, other containers as new lists.
        The input is never modified.
    """
    if use_as_callable(value):
        if context is not None and _accepts_context(value):
            return evaluate(value(context), context)
        return evaluate(value(), context)
    if isinstance(value, Mapping):
        return {key: evaluate(item, context) for key, item in value.items()}
    if is_container(value):
        return [evaluate(item, context) for item in value]
    return value
