# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Markup serialization - build html strings from names, attributes and contents.

These functions are what elements use to produce their html, but they are
usable on their own with plain values, producers and containers:

Example:
    >>> build_html_element('p', {'id': 'a', 'title': 't'}, ['a', 'b'])
    '<p id="a" title="t">\\na\\nb\\n</p>'
    >>> build_html_element('br', {'class': ['a', {'b': True, 'c': False}]})
    '<br class="a b">'

Keyed entries in a collection act as conditional tokens: the key is used
instead of the value, but only if the value is truthy. That works both for
list-valued attributes (``{'has-error': failed}`` in a class list) and for
contents.

Escaping is done with MarkupSafe. Anything exposing ``__html__`` (like
``markupsafe.Markup`` or an element) is inserted as-is.
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from typing import Any, Iterator

from markupsafe import escape

from .evaluation import evaluate, is_container

ATTRIBUTE_QUOTE_CHARS = ('"', "'")

# Readability constants for the escape_contents parameter
ESCAPED = True
UNESCAPED = False

# Html elements that have no closing tag when empty
VOID_ELEMENTS = frozenset({
    'area',
    'base',
    'br',
    'col',
    'embed',
    'hr',
    'img',
    'input',
    'keygen',
    'link',
    'menuitem',
    'meta',
    'param',
    'source',
    'track',
    'wbr',
})

# Longest single-line element before opening, content and closing get split
MAX_INLINE_LENGTH = 80


def build_html_element(
    tag_name: str,
    attributes: Any = None,
    contents: Any = None,
    escape_contents: bool = ESCAPED,
    attribute_quote_char: str = '"',
) -> str:
    """Build the html string of one element.

    Args:
        tag_name: The element name, e.g. 'div'.
        attributes: Mapping (or list of mappings, or producer) of attributes.
        contents: String, raw markup, element, producer or container of those.
        escape_contents: Set to UNESCAPED to insert string contents as-is.
        attribute_quote_char: Either " (default) or '.

    Returns:
        The element's html. Opening tag, contents and closing tag are joined
        by newlines if the result is long or the contents span lines.
    """
    tag_name = escape_html(tag_name)

    parts = [
        f"<{tag_name}{build_attributes_string(attributes, attribute_quote_char)}>",
        build_contents_string(contents, escape_contents),
    ]
    if parts[1] or tag_name not in VOID_ELEMENTS:
        parts.append(f"</{tag_name}>")

    multiline = len(''.join(parts)) > MAX_INLINE_LENGTH or '\n' in parts[1]
    return ('\n' if multiline else '').join(parts)


def build_contents_string(contents: Any = None, escape_contents: bool = ESCAPED) -> str:
    """Build a newline separated html string from contents.

    Each piece is trimmed. None, booleans and empty strings are dropped, as
    are objects without a string representation of their own.
    """
    pieces: list[str] = []
    for key, item in flatten(evaluate(contents)):
        if hasattr(item, '__html__'):
            pieces.append(str(item.__html__()))
            continue
        if key is not None and key.strip() and item:
            item = key
        if item is None or isinstance(item, bool):
            continue
        if not isinstance(item, str):
            if not _has_string_projection(item):
                continue
            item = str(item)
        item = item.strip()
        if escape_contents:
            item = escape_html(item)
        pieces.append(item)
    return '\n'.join(piece for piece in pieces if piece)


def build_attributes_string(attributes: Any = None, attribute_quote_char: str = '"') -> str:
    """Build an attribute string starting with a space, to put after the tag name.

    Attributes with a False or None value are left out, as are values
    without a string representation. True renders the attribute name alone
    and list values are joined by flatten_attribute_value.
    """
    quote = get_attribute_quote_char(attribute_quote_char)
    parts: list[str] = []
    for name, value in flatten_attributes(evaluate(attributes)).items():
        if value is False or value is None:
            continue
        value = flatten_attribute_value(name, value)
        if not isinstance(value, (str, bool)) and not _has_string_projection(value):
            continue
        parts.append(f" {escape_html(name)}")
        if value is not True:
            parts.append(f"={quote}{escape_html(value)}{quote}")
    return ''.join(parts)


def flatten_attributes(attributes: Any) -> dict[str, Any]:
    """Flatten positional attribute entries into a single name -> value dict.

    A positional container is merged in (so a list of mappings works like
    one mapping), a positional scalar becomes a boolean attribute named by
    the value: ``['readonly', {'name': 'a'}]`` gives
    ``{'readonly': True, 'name': 'a'}``.
    """
    flat: dict[str, Any] = {}
    for name, value in _keyed_items(attributes):
        if isinstance(name, str):
            flat[name] = value
        elif is_container(value):
            flat.update(flatten_attributes(value))
        elif value is not None and value is not False and value != '':
            flat[str(value)] = True
    return flat


def flatten_attribute_value(attribute_name: str, attribute_value: Any) -> Any:
    """Join a list-valued attribute into one string.

    Truthy positional entries contribute their value, truthy keyed entries
    contribute their key. Class tokens are joined by space, anything else
    by comma. Non-container values are returned unchanged.
    """
    if not is_container(attribute_value):
        return attribute_value
    tokens = [
        str(item) if key is None else key
        for key, item in flatten(attribute_value)
        if item
    ]
    return (' ' if attribute_name == 'class' else ',').join(tokens)


def flatten(*collections: Any) -> list[tuple[str | None, Any]]:
    """Flatten nested containers into one ordered list of (key, item) pairs.

    Positional entries get None as key. String keys are preserved from
    whatever nesting level they were found at, and a repeated string key
    overwrites the earlier item in place.

    Example:
        >>> flatten(['a', ['b', {'c': True}]], 'd')
        [(None, 'a'), (None, 'b'), ('c', True), (None, 'd')]
    """
    flat: list[tuple[str | None, Any]] = []
    positions: dict[str, int] = {}

    def walk(collection: Any) -> None:
        for key, item in _keyed_items(collection):
            if is_container(item):
                walk(item)
            elif isinstance(key, str):
                if key in positions:
                    flat[positions[key]] = (key, item)
                else:
                    positions[key] = len(flat)
                    flat.append((key, item))
            else:
                flat.append((None, item))

    walk(collections)
    return flat


def get_attribute_quote_char(attribute_quote_char: str = '"') -> str:
    """Return attribute_quote_char if it is a supported quote, else '"'."""
    if attribute_quote_char not in ATTRIBUTE_QUOTE_CHARS:
        return '"'
    return attribute_quote_char


def escape_html(value: Any) -> str:
    """Escape & < > " and ' for use in html text or attribute values."""
    return str(escape(value))


def _keyed_items(collection: Any) -> Iterator[tuple[Any, Any]]:
    """Iterate (key, item) pairs, with None keys for positional entries."""
    if collection is None:
        return
    if isinstance(collection, Mapping):
        yield from collection.items()
    elif is_container(collection):
        for item in collection:
            yield None, item
    else:
        yield None, collection


def _has_string_projection(item: Any) -> bool:
    """True for numbers and objects defining their own __str__."""
    return isinstance(item, numbers.Number) or type(item).__str__ is not object.__str__
