"""IntrospectionCache: LRU-backed caching proxy for any Introspector.

Wraps any Introspector-conformant object and caches its answers per type.
Reflecting over a class (type hints, MRO walk, property scan) costs far more
than projecting one instance, and a settings graph usually repeats a handful
of types many times. Negative answers (``None``) are cached too. LRU eviction
occurs silently when ``max_size`` is exceeded.

Each ``IntrospectionCache`` instance maintains its own ``LRUCache``; there is
no class-level shared state, so two separate instances never interfere with
each other.

Example::

    from object_tree.cache import IntrospectionCache
    from object_tree.introspectors import ReflectionIntrospector

    cache = IntrospectionCache(ReflectionIntrospector(), max_size=128)
    cache.schema(NetworkSettings)   # reflects
    cache.schema(NetworkSettings)   # served from memory
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cachetools import LRUCache

if TYPE_CHECKING:
    from object_tree.protocols import Introspector, TypeSchema


class IntrospectionCache:
    """LRU-backed caching proxy around any Introspector.

    Satisfies the ``Introspector`` Protocol structurally (no inheritance
    required).

    Args:
        introspector: Any object with a ``schema(tp) -> TypeSchema | None``
            method.
        max_size: Maximum number of types to remember. Defaults to 256.
    """

    def __init__(self, introspector: Introspector, max_size: int = 256) -> None:
        if max_size < 1:
            msg = f"max_size must be >= 1, got {max_size}"
            raise ValueError(msg)
        # Store as Any at runtime: structural duck-typing, no Protocol coupling.
        self._introspector: Any = introspector
        self._cache: LRUCache[type, TypeSchema | None] = LRUCache(maxsize=max_size)
        self._hits = 0
        self._misses = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    def clear(self) -> None:
        """Forget every cached schema, e.g. after re-registering types."""
        self._cache.clear()

    # ------------------------------------------------------------------
    # Introspector Protocol surface
    # ------------------------------------------------------------------

    def schema(self, tp: type) -> TypeSchema | None:
        """Return the schema for ``tp``; only unseen types reach the wrapped introspector."""
        if tp in self._cache:
            self._hits += 1
            return self._cache[tp]
        self._misses += 1
        schema: TypeSchema | None = self._introspector.schema(tp)
        self._cache[tp] = schema
        return schema
