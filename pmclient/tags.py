"""Tag-based cache for query results.

Queries declare the tags their result provides; mutations declare the tags
they invalidate. Invalidating a tag marks every cached result that provides
it as stale and notifies that entry's subscribers, so whatever is showing the
data refetches on its next read.

Matching rules:

* ``Tag("Tasks")`` (no id) invalidates every entry providing any ``Tasks`` tag.
* ``Tag("Tasks", 7)`` invalidates only entries providing ``Tag("Tasks", 7)``.

A fetch that is still in flight when a matching invalidation happens is
stored stale, so its pre-write snapshot is never served as fresh.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)

TAG_TYPES = ("Projects", "Tasks", "Users", "Teams")


class Tag(NamedTuple):
    type: str
    id: Hashable | None = None

    def __str__(self) -> str:
        return self.type if self.id is None else f"{self.type}:{self.id}"


def as_tag(value: "Tag | str | tuple") -> Tag:
    if isinstance(value, Tag):
        return value
    if isinstance(value, str):
        return Tag(value)
    return Tag(*value)


Subscriber = Callable[[Hashable], None]


def _hits(provided: Iterable[Tag], invalidated: Iterable[Tag]) -> bool:
    provided = set(provided)
    types = {tag.type for tag in provided}
    return any(tag in provided if tag.id is not None else tag.type in types for tag in invalidated)


@dataclass
class CacheEntry:
    key: Hashable
    data: Any = None
    tags: frozenset[Tag] = frozenset()
    stale: bool = False
    subscribers: list[Subscriber] = field(default_factory=list)


class TagCache:
    """In-memory store of query results indexed by the tags they provide."""

    def __init__(self) -> None:
        self._entries: dict[Hashable, CacheEntry] = {}
        # tag type -> tag id -> keys of entries providing that tag
        self._index: dict[str, dict[Hashable | None, set[Hashable]]] = defaultdict(lambda: defaultdict(set))
        # fetch id -> tags invalidated since the fetch began; None after a reset
        self._inflight: dict[int, list[Tag] | None] = {}
        self._next_fetch = 0

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: Hashable) -> CacheEntry | None:
        return self._entries.get(key)

    def is_fresh(self, key: Hashable) -> bool:
        entry = self._entries.get(key)
        return entry is not None and not entry.stale

    def store(self, key: Hashable, data: Any, tags: Iterable[Tag | str] = (), *, stale: bool = False) -> CacheEntry:
        """Save a fetched result, replacing the tags of any previous result.

        ``stale=True`` keeps the data but has the next read refetch it, and
        tells the entry's subscribers.
        """
        entry = self._entries.get(key)
        if entry is None:
            entry = CacheEntry(key=key)
            self._entries[key] = entry
        else:
            self._unindex(entry)

        entry.data = data
        entry.tags = frozenset(as_tag(tag) for tag in tags)
        entry.stale = stale
        for tag in entry.tags:
            self._index[tag.type][tag.id].add(key)
        if stale:
            self._notify(entry)
        return entry

    def begin_fetch(self) -> int:
        """Start tracking invalidations for a fetch about to go out."""
        self._next_fetch += 1
        self._inflight[self._next_fetch] = []
        return self._next_fetch

    def finish_fetch(self, fetch_id: int, key: Hashable, data: Any, tags: Iterable[Tag | str] = ()) -> CacheEntry:
        """Store the result of a tracked fetch.

        The result is stored stale when its tags were invalidated (or the
        cache was reset) while the request was on the wire.
        """
        tags = [as_tag(tag) for tag in tags]
        missed = self._inflight.pop(fetch_id, [])
        stale = missed is None or _hits(tags, missed)
        if stale:
            logger.debug(f"Result for {key} was invalidated in flight; storing it stale")
        return self.store(key, data, tags, stale=stale)

    def cancel_fetch(self, fetch_id: int) -> None:
        self._inflight.pop(fetch_id, None)

    def subscribe(self, key: Hashable, callback: Subscriber) -> Callable[[], None]:
        """Call ``callback(key)`` whenever the entry under ``key`` goes stale.

        The entry is created empty if nothing has been fetched yet. Returns a
        function that removes the subscription.
        """
        entry = self._entries.get(key)
        if entry is None:
            entry = CacheEntry(key=key, stale=True)
            self._entries[key] = entry
        entry.subscribers.append(callback)

        def unsubscribe() -> None:
            current = self._entries.get(key)
            if current is not None and callback in current.subscribers:
                current.subscribers.remove(callback)

        return unsubscribe

    def matching_keys(self, tags: Iterable[Tag | str]) -> set[Hashable]:
        keys: set[Hashable] = set()
        for tag in map(as_tag, tags):
            by_id = self._index.get(tag.type)
            if not by_id:
                continue
            if tag.id is None:
                for ids in by_id.values():
                    keys.update(ids)
            else:
                keys.update(by_id.get(tag.id, ()))
        return keys

    def invalidate(self, tags: Iterable[Tag | str]) -> set[Hashable]:
        """Mark every entry whose tags intersect ``tags`` stale and notify it."""
        tags = [as_tag(tag) for tag in tags]
        for missed in self._inflight.values():
            if missed is not None:
                missed.extend(tags)

        keys = self.matching_keys(tags)
        if keys:
            logger.debug(f"Invalidating {len(keys)} cached queries for tags {[str(t) for t in tags]}")
        for key in keys:
            entry = self._entries[key]
            entry.stale = True
            self._notify(entry)
        return keys

    def remove(self, key: Hashable) -> None:
        entry = self._entries.pop(key, None)
        if entry is not None:
            self._unindex(entry)

    def reset(self) -> None:
        """Drop every cached result.

        Subscriptions survive: each watched key gets an empty stale entry and
        its subscribers are told, and fetches in flight are stored stale.
        """
        watched = {key: entry.subscribers for key, entry in self._entries.items() if entry.subscribers}
        self._entries.clear()
        self._index.clear()
        for fetch_id in self._inflight:
            self._inflight[fetch_id] = None

        for key, subscribers in watched.items():
            entry = CacheEntry(key=key, stale=True, subscribers=subscribers)
            self._entries[key] = entry
            self._notify(entry)

    def _notify(self, entry: CacheEntry) -> None:
        for callback in list(entry.subscribers):
            callback(entry.key)

    def _unindex(self, entry: CacheEntry) -> None:
        for tag in entry.tags:
            ids = self._index.get(tag.type, {}).get(tag.id)
            if ids is not None:
                ids.discard(entry.key)
                if not ids:
                    del self._index[tag.type][tag.id]
