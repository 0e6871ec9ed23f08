# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FluentHtmlElement - fluent interface base class for building html trees.

An element has an optional html element name, attributes, contents, default
contents and display conditions. Any of those can be given as producers
(callables) that are only evaluated when the element is rendered, receiving
the element as their argument.

Elements form a strict tree: an element inserted somewhere while it already
has a parent is cloned first, so no element is ever referenced from two
places.

Method groups:
    - **with_* / without_***: modify the element and return it for chaining
    - ***_element**: create a new element relative to this one and return it
    - **get_* / has_***: navigate the tree and query state
    - **to_html() / str()**: render; ``str()`` always renders the whole tree

Example:
    Building a small tree::

        div = FluentHtml.create('div').with_class('wrapper')
        div.containing_element('p').with_content('First paragraph.') \\
            .followed_by_element('p').with_content('Second paragraph.')
        print(div)

    Deferred values::

        show = False
        p = FluentHtml.create('p', 'Maybe').only_displayed_if(lambda: show)
        str(p)  # ''
        show = True
        str(p)  # '<p>Maybe</p>'
"""

from __future__ import annotations

import copy
import logging
from abc import ABC
from collections.abc import Iterator, Mapping
from typing import Any, Callable

from markupsafe import Markup

from .evaluation import evaluate, is_container, use_as_callable
from .exceptions import InvalidArgumentError, RenderError
from .factory import ElementFactory, default_factory
from .markup import (
    build_contents_string,
    build_html_element,
    escape_html,
    flatten,
    flatten_attribute_value,
)
from .registrar import HtmlIdRegistrar, IdRegistrar

logger = logging.getLogger(__name__)


class FluentHtmlElement(ABC):
    """Base class for fluent html elements.

    Subclass it (or FluentHtml) to build elements with more specific
    behaviour. Class level configuration:

    Attributes:
        attribute_quote_char: Quote used around attribute values, " or '.
        raise_on_render_error: If False (default), an exception while
            rendering is replaced by an html comment describing it, so the
            rest of the document still renders. If True, RenderError is
            raised instead.
        element_factory: Factory used by create_instance_of() when the
            instance has no factory of its own.
    """

    __slots__ = (
        '_parent', '_render_in_html', '_html_element_name',
        '_html_attributes', '_html_contents', '_default_html_contents',
        '_id_registrar', '_after_insertion_callbacks', '_element_factory',
    )

    attribute_quote_char: str = '"'
    raise_on_render_error: bool = False
    element_factory: ElementFactory | None = default_factory

    def __init__(self) -> None:
        self._parent: FluentHtmlElement | None = None
        self._render_in_html: list[Any] = []
        self._html_element_name: Any = None
        self._default_html_contents: list[Any] = []
        self._id_registrar: IdRegistrar | None = None
        self._after_insertion_callbacks: list[Callable[[FluentHtmlElement], Any]] = []
        self._element_factory: ElementFactory | None = None
        self._clear_attributes()
        self._clear_contents()

    # ==================== Creating new elements ====================

    @classmethod
    def create_fluent_html_element(
        cls,
        html_element_name: Any = None,
        tag_contents: Any = None,
        tag_attributes: Any = None,
    ) -> FluentHtmlElement:
        """Create a new basic element, used by the *_element() methods.

        Override in a subclass to change what kind of element those create.
        """
        # Import here to avoid circular dependency
        from .fluent_html import FluentHtml

        return FluentHtml.create(html_element_name, tag_contents, tag_attributes)

    def create_instance_of(self, name: str, *args: Any, **kwargs: Any) -> FluentHtmlElement:
        """Create an element of another type, looked up by logical name.

        The name is resolved by this element's factory first, then by the
        parent element's, up to the root. The new instance shares the tree's
        id registrar if the root already has one.

        Args:
            name: Name the constructor was registered under.
            *args: Passed to the constructor.
            **kwargs: Passed to the constructor.

        Returns:
            The new, unattached element.

        Raises:
            InvalidArgumentError: If no factory in the tree knows the name.
        """
        factory = self.get_element_factory()
        constructor = factory.get(name) if factory is not None else None
        if constructor is not None:
            instance = constructor(*args, **kwargs)
            root = self.get_root_element()
            if root.has_id_registrar():
                instance.id_registrar(root.id_registrar())
            return instance
        if self.has_parent():
            return self.get_parent().create_instance_of(name, *args, **kwargs)
        logger.debug("No factory in the tree of %r resolves %r", self, name)
        raise InvalidArgumentError(
            f"{name} could not be created by {type(self).__name__}.create_instance_of"
        )

    def get_element_factory(self) -> ElementFactory | None:
        """Return the instance factory, or the class level one."""
        if self._element_factory is not None:
            return self._element_factory
        return type(self).element_factory

    def with_element_factory(self, factory: ElementFactory | None) -> FluentHtmlElement:
        """Set a factory for this element, also used by its descendants."""
        self._element_factory = factory
        return self

    # ==================== Modifying and returning same element ====================

    def with_content(self, *html_contents: Any) -> FluentHtmlElement:
        """Alias for with_appended_content, add contents last in this element."""
        return self.with_appended_content(*html_contents)

    def with_appended_content(self, *html_contents: Any) -> FluentHtmlElement:
        """Add contents after any existing contents in this element.

        Args:
            *html_contents: Strings, raw markup, elements, producers or
                (nested) containers of those. Keyed entries in a mapping are
                conditional: the key is rendered if the value is truthy.
        """
        self._html_contents.extend(self._prepare_contents_for_insertion(html_contents))
        return self

    def with_prepended_content(self, *html_contents: Any) -> FluentHtmlElement:
        """Add contents before any existing contents in this element."""
        self._html_contents[:0] = self._prepare_contents_for_insertion(html_contents)
        return self

    def followed_by(self, *html_siblings: Any) -> FluentHtmlElement:
        """Add contents outside and just after this element in the tree.

        If this element has no parent, an unnamed parent is created first.
        """
        parent = self.get_parent_element()
        offset = parent._get_content_offset(self)
        offset = len(parent._html_contents) if offset is None else offset + 1
        parent._splice_content(offset, 0, html_siblings)
        return self

    def preceded_by(self, *html_siblings: Any) -> FluentHtmlElement:
        """Add contents outside and just before this element in the tree."""
        parent = self.get_parent_element()
        offset = parent._get_content_offset(self)
        parent._splice_content(offset or 0, 0, html_siblings)
        return self

    def wrapped_in(self, wrapper: FluentHtmlElement) -> FluentHtmlElement:
        """Wrap this element in another element, at the same place in the tree.

        This element is moved, not cloned: the wrapper takes its slot among
        the former siblings and this element becomes the wrapper's content.
        A wrapper that already has a parent, or is the root of this element's
        tree, is cloned first and the clone is used.
        """
        if wrapper.has_parent() or wrapper is self.get_root_element():
            wrapper = wrapper.clone()

        parent = None
        if self.has_parent():
            parent = self.get_parent()
            self._set_parent(None)

        wrapper.with_appended_content(self)

        if parent is not None:
            contents = []
            for item in parent._html_contents:
                if item is self:
                    wrapper._set_parent(parent)
                    item = wrapper
                contents.append(item)
            parent._html_contents = contents

        return self

    def with_raw_html_content(self, raw_html_content: str) -> FluentHtmlElement:
        """Add a string of html last in this element, without escaping it."""
        return self.with_content(Markup(raw_html_content))

    def with_content_wrapped_in(
        self,
        html_contents: Any,
        wrapping_html_element_name: Any,
        wrapping_tag_attributes: Any = None,
    ) -> FluentHtmlElement:
        """Add contents last in this element, each one wrapped in a new element.

        The wrapping elements are only displayed if they end up with content.

        Example:
            >>> ul.with_content_wrapped_in(['One', 'Two'], 'li')  # two <li>
        """
        for _key, html_content in flatten(html_contents):
            self.with_content(
                self.create_fluent_html_element(
                    wrapping_html_element_name, html_content, wrapping_tag_attributes
                ).only_displayed_if_has_content()
            )
        return self

    def with_default_content(self, *html_contents: Any) -> FluentHtmlElement:
        """Set contents to render only if the regular contents evaluate empty.

        Replaces any previously set default contents.
        """
        self._default_html_contents = self._prepare_contents_for_insertion(html_contents)
        return self

    def _clear_contents(self) -> FluentHtmlElement:
        self._html_contents: list[Any] = []
        return self

    def _clear_attributes(self) -> FluentHtmlElement:
        self._html_attributes: dict[str | int, Any] = {}
        return self

    def with_attribute(self, attributes: Any, value: Any = True) -> FluentHtmlElement:
        """Set one or more attributes, overriding any with the same name.

        Attributes evaluating to False or None are not rendered.

        Args:
            attributes: Attribute name, or a mapping of names and values,
                or a producer returning such a mapping, or a list of those.
                Positional entries in a list become boolean attributes
                named by the entry: ``['readonly']``.
            value: Value for a single named attribute. Can be a producer or
                a list (joined by space for class, comma otherwise).

        Example:
            >>> e.with_attribute('type', 'text')
            >>> e.with_attribute('autofocus')
            >>> e.with_attribute({'name': 'a', 'disabled': lambda: locked})
        """
        if isinstance(attributes, str):
            self._html_attributes[attributes] = _stored(value)
        elif use_as_callable(attributes):
            self._push_attribute(attributes)
        elif attributes is not None:
            self._merge_attributes(attributes)
        return self

    def without_attribute(self, *attributes: Any) -> FluentHtmlElement:
        """Remove one or more named attributes."""
        for _key, attribute in flatten(attributes):
            self.with_attribute(attribute, False)
        return self

    def with_id(self, desired_id: str) -> FluentHtmlElement:
        """Set the id attribute, to desired_id or a unique variant of it.

        Uniqueness is checked against the tree's id registrar.
        """
        return self.with_attribute('id', self._unique_id(desired_id))

    def with_class(self, *classes: Any) -> FluentHtmlElement:
        """Add one or more class names to the element.

        Example:
            >>> e.with_class('a', ['b', 'c'])
            >>> e.with_class({'has-error': lambda: bool(errors)})
        """
        return self.with_attribute(
            'class', self._get_raw_classes() + _entries(flatten(classes))
        )

    def without_class(self, *classes: Any) -> FluentHtmlElement:
        """Remove one or more class names from the element.

        Only literal class names can be removed; classes coming from a
        producer are left alone.
        """
        removed = {str(item) for _key, item in flatten(classes)}
        kept: list[Any] = []
        for key, item in flatten(self._get_raw_classes()):
            if key is not None:
                if key not in removed:
                    kept.append({key: item})
            elif isinstance(item, str):
                tokens = item.split()
                if removed.intersection(tokens):
                    kept.extend(token for token in tokens if token not in removed)
                else:
                    kept.append(item)
            else:
                kept.append(item)
        return self.with_attribute('class', kept)

    def with_html_element_name(self, html_element_name: Any) -> FluentHtmlElement:
        """Set the html element name, or None to render only the contents."""
        self._html_element_name = html_element_name
        return self

    def only_displayed_if(self, condition: Any) -> FluentHtmlElement:
        """Don't render this element (or anything in it) unless condition holds.

        Every condition added must evaluate truthy for the element to render.
        A None condition counts as False.
        """
        if condition is None:
            condition = False
        self._render_in_html.append(condition)
        return self

    def only_displayed_if_has_content(self) -> FluentHtmlElement:
        """Don't render this element if it has no content."""
        return self.only_displayed_if(lambda element: element.has_content())

    def after_insertion(self, callback: Callable[[FluentHtmlElement], Any]) -> FluentHtmlElement:
        """Register a callback to run each time this element gets a parent.

        The callback receives this element. It may run several times over
        the element's life, so check the element's state before changing it.
        """
        self._after_insertion_callbacks.append(callback)
        return self

    # ==================== Creating and returning new element ====================

    def containing_element(
        self, html_element_name: Any = None, tag_contents: Any = None, tag_attributes: Any = None
    ) -> FluentHtmlElement:
        """Alias for ending_with_element."""
        return self.ending_with_element(html_element_name, tag_contents, tag_attributes)

    def ending_with_element(
        self, html_element_name: Any = None, tag_contents: Any = None, tag_attributes: Any = None
    ) -> FluentHtmlElement:
        """Add a new element last in this element and return the new element."""
        element = self.create_fluent_html_element(html_element_name, tag_contents, tag_attributes)
        self.with_content(element)
        return element

    def starting_with_element(
        self, html_element_name: Any = None, tag_contents: Any = None, tag_attributes: Any = None
    ) -> FluentHtmlElement:
        """Add a new element first in this element and return the new element."""
        element = self.create_fluent_html_element(html_element_name, tag_contents, tag_attributes)
        self.with_prepended_content(element)
        return element

    def followed_by_element(
        self, html_element_name: Any = None, tag_contents: Any = None, tag_attributes: Any = None
    ) -> FluentHtmlElement:
        """Add a new element just after this one and return the new element."""
        element = self.create_fluent_html_element(html_element_name, tag_contents, tag_attributes)
        self.followed_by(element)
        return element

    def preceded_by_element(
        self, html_element_name: Any = None, tag_contents: Any = None, tag_attributes: Any = None
    ) -> FluentHtmlElement:
        """Add a new element just before this one and return the new element."""
        element = self.create_fluent_html_element(html_element_name, tag_contents, tag_attributes)
        self.preceded_by(element)
        return element

    def wrapped_in_element(
        self, html_element_name: Any = None, tag_attributes: Any = None
    ) -> FluentHtmlElement:
        """Wrap only this element in a new element and return the new element."""
        wrapper = self.create_fluent_html_element(html_element_name, None, tag_attributes)
        self.wrapped_in(wrapper)
        return wrapper

    def siblings_wrapped_in_element(
        self, html_element_name: Any = None, tag_attributes: Any = None
    ) -> FluentHtmlElement:
        """Wrap this element and its siblings in a new element and return it.

        The siblings are all contents of the closest named ancestor (see
        get_siblings_common_parent), which ends up with the wrapper as its
        only content.
        """
        parent = self.get_siblings_common_parent()
        siblings = parent._html_contents
        for _key, item in flatten(siblings):
            if isinstance(item, FluentHtmlElement):
                item._set_parent(None)
        wrapper = self.create_fluent_html_element(html_element_name, siblings, tag_attributes)

        parent._clear_contents().with_content(wrapper)

        return wrapper

    # ==================== Returning existing elements ====================

    def get_parent(self) -> FluentHtmlElement | None:
        """Return the parent element, or None for a root element."""
        return self._parent

    def has_parent(self) -> bool:
        return self._parent is not None

    def get_parent_element(self) -> FluentHtmlElement:
        """Return the parent element, creating an unnamed one if there is none.

        The created parent contains this element and is itself a root, so
        sibling operations work on any element.
        """
        if self._parent is not None:
            return self._parent
        return self.create_fluent_html_element(None, self)

    def get_siblings_common_parent(self) -> FluentHtmlElement:
        """Return the closest named ancestor, or an unnamed parent if none.

        Unnamed elements render only their contents, so this is the parent
        this element and its siblings share in the rendered html.
        """
        element = self
        while element.has_parent():
            parent = element.get_parent()
            if parent.has_html_element_name():
                return parent
            element = parent
        return element.get_parent_element()

    def get_root_element(self) -> FluentHtmlElement:
        """Return the root element of this element's tree."""
        element = self
        while element._parent is not None:
            element = element._parent
        return element

    def get_ancestor_instance_of(self, kind: type | tuple[type, ...] | Callable[[Any], bool]) -> FluentHtmlElement | None:
        """Return the closest ancestor matching kind, or None.

        Args:
            kind: A class or tuple of classes for an isinstance check, or a
                predicate receiving each ancestor.
        """
        ancestor = self._parent
        while ancestor is not None:
            if isinstance(kind, (type, tuple)):
                if isinstance(ancestor, kind):
                    return ancestor
            elif kind(ancestor):
                return ancestor
            ancestor = ancestor._parent
        return None

    # ==================== Element state ====================

    def get_id(self, desired_id: str | None = None) -> str:
        """Return the id attribute, setting a unique one first if missing.

        Args:
            desired_id: Id to try if none is set. Defaults to get_default_id().
        """
        if not self.get_attribute('id'):
            self.with_id(desired_id or self.get_default_id())
        return self.get_attribute('id')

    def has_class(self, class_name: str) -> bool:
        """True if this element will have the class when rendered."""
        classes = self.get_attribute('class')
        if classes:
            return class_name in str(flatten_attribute_value('class', classes)).split()
        return False

    def _get_raw_classes(self) -> list[Any]:
        """Return the class attribute's raw entries as a list (not evaluated)."""
        raw = self._html_attributes.get('class')
        if raw is None:
            return []
        if isinstance(raw, Mapping):
            return [{key: value} if isinstance(key, str) else value for key, value in raw.items()]
        if is_container(raw):
            return list(raw)
        return [raw]

    def get_attribute(self, attribute: str) -> Any:
        """Return the evaluated value of a named attribute, or None."""
        return self.evaluate(self._html_attributes.get(attribute))

    def _get_raw_attribute(self, attribute: str) -> Any:
        return self._html_attributes.get(attribute)

    def has_content(self) -> bool:
        """True if this element has contents (or default contents) to render."""
        return bool(
            build_contents_string(self.evaluate(self._html_contents))
            or build_contents_string(self.evaluate(self._default_html_contents))
        )

    def get_content_count(self) -> int:
        """Return the number of content pieces, including ones that render empty."""
        return len(self._html_contents)

    def will_render_in_html(self) -> bool:
        """True only if every display condition evaluates truthy."""
        return all(self.evaluate(condition) for condition in self._render_in_html)

    def is_root_element(self) -> bool:
        return self._parent is None

    def _get_content_offset(self, content: Any) -> int | None:
        """Return the position of content among this element's contents."""
        for offset, item in enumerate(self._html_contents):
            if item is content:
                return offset
        return None

    def has_html_element_name(self) -> bool:
        """True if an element name is set, even a producer returning nothing."""
        return bool(self._html_element_name)

    def get_html_element_name(self) -> str | None:
        """Return the evaluated element name."""
        return self.evaluate(self._html_element_name)

    # ==================== Id registrar ====================

    def get_default_id(self) -> str:
        """Return the id to try when get_id() is called without a desired id.

        Override in subclasses, e.g. to build ids from ancestors' ids. Ending
        a static default with 1 makes the generated sequence read better.
        """
        return f"{type(self).__name__}1"

    def _unique_id(self, desired_id: str) -> str:
        return self.id_registrar().unique(desired_id)

    def id_registrar(self, id_registrar: IdRegistrar | None = None) -> IdRegistrar:
        """Get the id registrar of this element's tree, setting it if needed.

        The registrar lives on the root element. If none is set yet, the
        given one is adopted, or the global HtmlIdRegistrar if None. Once a
        registrar is set it is always returned, so call this as late as
        possible.
        """
        if self.is_root_element():
            if self._id_registrar is None:
                self._id_registrar = id_registrar or HtmlIdRegistrar.get_global_instance()
            return self._id_registrar

        return self.get_root_element().id_registrar(id_registrar)

    def has_id_registrar(self) -> bool:
        """True if a registrar is set on this very element."""
        return self._id_registrar is not None

    # ==================== Rendering ====================

    def to_html(self) -> str:
        """Render this element and its descendants as html.

        Returns:
            The html string, '' if the element is not displayed. If anything
            fails while rendering, an html comment describing the error is
            returned in place of this element (see raise_on_render_error).
        """
        try:
            return self._build_html()
        except Exception as exc:
            if self.raise_on_render_error:
                if isinstance(exc, RenderError):
                    raise
                raise RenderError(f"{type(self).__name__} failed to render: {exc}") from exc
            logger.warning(
                "%s failed to render, replaced by an html comment",
                type(self).__name__, exc_info=True,
            )
            return (
                f"<!-- {type(exc).__name__} in {type(self).__name__}.to_html: "
                f"{escape_html(exc)} -->"
            )

    def _build_html(self) -> str:
        if not self.will_render_in_html():
            return ''

        html_contents = self.evaluate(self._html_contents)
        if not html_contents:
            html_contents = self.evaluate(self._default_html_contents)
        # Contents produced at render time get this element as parent
        for _key, item in flatten(html_contents):
            if isinstance(item, FluentHtmlElement) and not item.has_parent():
                item._set_parent(self)

        html_element_name = self.get_html_element_name()
        if html_element_name:
            return build_html_element(
                html_element_name,
                self.evaluate(self._html_attributes),
                html_contents,
                attribute_quote_char=self.attribute_quote_char,
            )
        return build_contents_string(html_contents)

    def __html__(self) -> Markup:
        """Markup protocol, lets elements be used as raw content anywhere."""
        return Markup(self.to_html())

    def __str__(self) -> str:
        """Render the whole tree this element belongs to, from the root down."""
        return self.get_root_element().to_html()

    def __repr__(self) -> str:
        name = self._html_element_name
        name_repr = repr(name) if name is None or isinstance(name, str) else '<deferred>'
        parts = [name_repr]
        attribute_names = [key for key in self._html_attributes if isinstance(key, str)]
        if attribute_names:
            parts.append(f"attributes={attribute_names}")
        if self._html_contents:
            parts.append(f"contents={len(self._html_contents)}")
        if self._parent is not None:
            parts.append(f"parent={self._parent._html_element_name!r}")
        return f"{type(self).__name__}({', '.join(parts)})"

    # ==================== Deferred values ====================

    def evaluate(self, value: Any) -> Any:
        """Recursively evaluate value, passing this element to producers.

        Producers should only read from the element, never modify the tree.
        """
        return evaluate(value, self)

    # ==================== Internals ====================

    def _prepare_contents_for_insertion(self, html_contents: Any) -> list[Any]:
        """Flatten contents and make them ready to store in this element.

        Elements that already have a parent are cloned, then get this
        element as parent. None, booleans and empty strings are dropped;
        keyed entries are kept as single entry dicts so the key survives
        until rendering.
        """
        prepared: list[Any] = []
        for key, item in flatten(html_contents):
            if isinstance(item, FluentHtmlElement):
                item = self._adopt(item)
            if key is None:
                if item is None or isinstance(item, bool) or _is_empty_string(item):
                    continue
                prepared.append(item)
            else:
                if item is None or item is False or _is_empty_string(item):
                    continue
                prepared.append({key: item})
        return prepared

    def _adopt(self, element: FluentHtmlElement) -> FluentHtmlElement:
        """Make element a child of this element, cloning it if it has a parent.

        The root of this element's tree is cloned too, so a tree never
        contains itself.

        A clone loses its id, so the original id is requested again from the
        registrar, giving the clone a unique variant of it.
        """
        original_id = element.get_attribute('id')
        if element.has_parent() or element is self.get_root_element():
            element = element.clone()
        element._set_parent(self)
        if original_id and element.get_attribute('id') != original_id:
            element.with_id(original_id)
        return element

    def _splice_content(self, offset: int, length: int, replacement: Any) -> list[Any]:
        """Replace length contents at offset with prepared replacement contents."""
        replacement = self._prepare_contents_for_insertion(replacement)
        removed = self._html_contents[offset:offset + length]
        self._html_contents[offset:offset + length] = replacement
        return removed

    def _push_attribute(self, value: Any) -> None:
        """Add an unnamed attribute entry (a producer or a list of attributes)."""
        indexes = [key for key in self._html_attributes if isinstance(key, int)]
        self._html_attributes[max(indexes) + 1 if indexes else 0] = value

    def _merge_attributes(self, attributes: Any) -> None:
        if isinstance(attributes, Mapping):
            items = attributes.items()
        elif is_container(attributes):
            items = [(None, value) for value in attributes]
        else:
            items = [(None, attributes)]
        for name, value in items:
            if isinstance(name, str):
                self._html_attributes[name] = _stored(value)
            else:
                self._push_attribute(_stored(value))

    def clone(self) -> FluentHtmlElement:
        """Return a copy of this element with its whole subtree copied.

        The copy has no parent and no id. Contained elements are cloned
        too, so the tree never references one element from two places.
        """
        duplicate = copy.copy(self)
        duplicate._html_attributes = dict(self._html_attributes)
        duplicate._render_in_html = list(self._render_in_html)
        duplicate._after_insertion_callbacks = list(self._after_insertion_callbacks)
        # Still attached to the original's parent here, so re-issued ids
        # come from the same registrar
        duplicate._html_contents = duplicate._prepare_contents_for_insertion(self._html_contents)
        duplicate._default_html_contents = duplicate._prepare_contents_for_insertion(
            self._default_html_contents
        )
        duplicate._parent = None
        duplicate.without_attribute('id')
        return duplicate

    def _set_parent(self, parent: FluentHtmlElement | None) -> None:
        """Set the parent element and run the after insertion callbacks.

        An element carrying its own id registrar hands it to the new tree,
        which adopts it only if it has none yet.
        """
        if parent is not None and self.has_id_registrar():
            logger.debug("Offering id registrar of %r to the tree of %r", self, parent)
            parent.id_registrar(self.id_registrar())
        self._parent = parent
        if parent is not None:
            for callback in list(self._after_insertion_callbacks):
                callback(self)


def _entries(pairs: list[tuple[str | None, Any]]) -> list[Any]:
    """Turn flattened (key, item) pairs back into storable entries."""
    return [item if key is None else {key: item} for key, item in pairs]


def _is_empty_string(item: Any) -> bool:
    return isinstance(item, str) and item == ''


def _stored(value: Any) -> Any:
    """Turn one-shot iterators into lists so every render sees the values."""
    if isinstance(value, Iterator):
        return list(value)
    return value
