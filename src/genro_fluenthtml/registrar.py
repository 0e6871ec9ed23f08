# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Id registrars keeping html id strings unique within an element tree."""

from __future__ import annotations

import re

from .exceptions import InvalidArgumentError

# Non-greedy base followed by the trailing digits, if any
_ID_PATTERN = re.compile(r'^(.+?)(\d+)?$', re.DOTALL)

# Process-wide default registrar, created on first use
_global_instance: HtmlIdRegistrar | None = None


class IdRegistrar:
    """Keeps track of used id strings and hands out unused ones.

    Example:
        >>> registrar = IdRegistrar()
        >>> registrar.unique('a')
        'a'
        >>> registrar.unique('a')
        'a2'
        >>> registrar.unique('a')
        'a3'
    """

    __slots__ = ('_repository',)

    def __init__(self) -> None:
        self._repository: set[str] = set()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._repository)} ids)"

    def unique(self, desired_id: str) -> str:
        """Register and return desired_id, or the next free variant of it.

        A taken id gets its trailing number incremented (a missing number
        counts as 1), so 'a' becomes 'a2' and 'a3' becomes 'a4'. Only digits
        at the very end count: 'a1a' becomes 'a1a2'.

        Args:
            desired_id: Id to use if not already taken.

        Returns:
            An id guaranteed to be unique in this registrar.

        Raises:
            InvalidArgumentError: If desired_id is empty.
        """
        if not desired_id:
            raise InvalidArgumentError(
                f"{type(self).__name__}.unique() needs a non-empty desired id, "
                f"got {desired_id!r}"
            )
        candidate = str(desired_id)
        while not self._add(candidate):
            match = _ID_PATTERN.match(candidate)
            base, number = match.group(1), match.group(2)
            candidate = f"{base}{max(int(number or 0), 1) + 1}"
        return candidate

    def exists(self, id: str) -> bool:
        """True if the id has already been handed out."""
        return id in self._repository

    def _add(self, id: str) -> bool:
        """Store id if not present. Returns False if it was already taken."""
        if id in self._repository:
            return False
        self._repository.add(id)
        return True


class HtmlIdRegistrar(IdRegistrar):
    """Registrar for html element ids, with a process-wide default instance.

    Element trees that never got an explicit registrar share the global
    instance, so ids stay unique across every tree rendered by the process.
    """

    __slots__ = ()

    def unique(self, desired_id: str | None = None) -> str:
        """Like IdRegistrar.unique, defaulting to 'HtmlIdRegistrar1'."""
        if not desired_id:
            desired_id = f"{type(self).__name__}1"
        return super().unique(desired_id)

    @classmethod
    def get_global_instance(cls) -> HtmlIdRegistrar:
        """Return the process-wide registrar, creating it on first use."""
        global _global_instance

        if _global_instance is None:
            _global_instance = cls()
        return _global_instance

    @classmethod
    def set_global_instance(cls, registrar: HtmlIdRegistrar | None) -> None:
        """Replace the process-wide registrar.

        Trees that already picked up the previous instance keep using it.
        Passing None makes the next get_global_instance() create a new one.
        """
        global _global_instance

        _global_instance = registrar
