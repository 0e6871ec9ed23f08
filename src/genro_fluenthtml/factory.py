# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ElementFactory - registry of element constructors by logical name.

Custom element classes often need to create other custom elements (a form
group creating its label, a table creating its rows...). Instead of
importing those classes directly, an element asks for them by name with
``create_instance_of()`` and the name is resolved through factories:

1. the element's own factory (instance factory, or the class attribute
   ``element_factory``), including that factory's parent chain,
2. then the same lookup on the element's parent element, up to the root.

Example:
    >>> widgets = ElementFactory(parent=default_factory)
    >>> @widgets.register()
    ... class Badge(FluentHtml):
    ...     def __init__(self, text=None):
    ...         super().__init__('span', text, {'class': 'badge'})
    ...
    >>> widgets.get('Badge') is Badge
    True
    >>> widgets.get('FluentHtml') is FluentHtml   # found in parent factory
    True
"""

from __future__ import annotations

from typing import Any, Callable


class ElementFactory:
    """Maps logical element names to constructors.

    Factories can be chained: a name not found in this factory is looked
    up in the parent factory, so a specialised factory extends a general
    one without copying it.
    """

    __slots__ = ('_constructors', 'parent')

    def __init__(self, parent: ElementFactory | None = None) -> None:
        """Initialize an ElementFactory.

        Args:
            parent: Factory to search for names not registered here.
        """
        self._constructors: dict[str, Callable[..., Any]] = {}
        self.parent = parent

    def __repr__(self) -> str:
        return f"ElementFactory({list(self._constructors.keys())})"

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def register(self, name: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator registering a class (or any constructor) under a name.

        Args:
            name: Logical name. If None, the constructor's __name__ is used.

        Example:
            >>> @factory.register()
            ... class Panel(FluentHtml): ...
            >>> @factory.register('Row')
            ... def make_row(*contents):
            ...     return FluentHtml('div', contents, {'class': 'row'})
        """
        def decorator(constructor: Callable[..., Any]) -> Callable[..., Any]:
            self._constructors[name or constructor.__name__] = constructor
            return constructor

        return decorator

    def get(self, name: str) -> Callable[..., Any] | None:
        """Return the constructor for name, searching parent factories.

        Returns:
            The constructor, or None if no factory in the chain has it.
        """
        factory: ElementFactory | None = self
        while factory is not None:
            constructor = factory._constructors.get(name)
            if constructor is not None:
                return constructor
            factory = factory.parent
        return None

    def names(self) -> list[str]:
        """Return all resolvable names, own names first."""
        names = list(self._constructors)
        if self.parent is not None:
            names.extend(n for n in self.parent.names() if n not in self._constructors)
        return names


# Factory used by elements that don't set one. FluentHtml registers itself here.
default_factory = ElementFactory()
