from __future__ import annotations

import weakref
from typing import Any

DEFAULT_TAG = "default"
"""Tag used when ``MetaStore`` callers do not pass one."""


class MetaStore:
    """Weak-keyed storage of arbitrary tagged data per target.

    Targets are classes, functions or any other weak-referenceable object.
    Entries disappear together with their target.
    """

    def __init__(self) -> None:
        self._entries: weakref.WeakKeyDictionary[Any, dict[Any, Any]] = weakref.WeakKeyDictionary()

    def set(self, target: object, data: Any, tag: Any = DEFAULT_TAG) -> MetaStore:
        """Store ``data`` for ``target`` under ``tag``, replacing earlier data.

        Raises:
            TypeError: If ``target`` cannot be weakly referenced.

        """
        entry = self._entries.get(target)
        if entry is None:
            entry = {}
            self._entries[target] = entry
        entry[tag] = data
        return self

    def get(self, target: object, tag: Any = DEFAULT_TAG, default: Any = None) -> Any:
        entry = self._lookup(target)
        if entry is None:
            return default
        return entry.get(tag, default)

    def has(self, target: object, tag: Any = DEFAULT_TAG) -> bool:
        entry = self._lookup(target)
        return entry is not None and tag in entry

    def forget(self, target: object, tag: Any = DEFAULT_TAG) -> bool:
        """Remove data stored under ``tag``. Return whether anything was removed."""
        entry = self._lookup(target)
        if entry is None or tag not in entry:
            return False
        del entry[tag]
        return True

    def forget_all(self, target: object) -> bool:
        """Remove every entry of ``target``. Return whether anything was removed."""
        if self._lookup(target) is None:
            return False
        del self._entries[target]
        return True

    def _lookup(self, target: object) -> dict[Any, Any] | None:
        try:
            return self._entries.get(target)
        except TypeError:
            # not weak-referenceable, so nothing can be stored for it
            return None


default_meta_store = MetaStore()
"""Process-wide store shared by reflectors that are not given their own."""
