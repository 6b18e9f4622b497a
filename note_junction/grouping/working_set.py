"""Working set of candidate groups consumed by the resolver.

The arena keeps groups in insertion order. Extracting a group removes its
members from every other group, so sizes shrink as resolution proceeds and a
group emptied this way can never be selected again.
"""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, Mapping, Optional, TypeVar

T = TypeVar("T")


class GroupArena(Generic[T]):
    """Insertion-ordered groups of members keyed by member uid."""

    def __init__(self, groups: Mapping[str, Mapping[str, T]]) -> None:
        self._groups: dict[str, dict[str, T]] = {key: dict(members) for key, members in groups.items()}

    def keys(self) -> list[str]:
        return list(self._groups)

    def size_of(self, key: str) -> int:
        return len(self._groups.get(key, {}))

    def members(self, key: str) -> list[T]:
        return list(self._groups.get(key, {}).values())

    def largest_in_subset(self, keys: Optional[Iterable[str]] = None, min_size: int = 1) -> Optional[str]:
        """Key of the largest group among ``keys`` with at least ``min_size`` members.

        Ties go to the group inserted first into the arena. ``keys=None``
        considers every group still present.
        """
        subset = None if keys is None else set(keys)
        best_key = None
        best_size = 0
        for key, members in self._groups.items():
            if subset is not None and key not in subset:
                continue
            size = len(members)
            if size >= min_size and size > best_size:
                best_key, best_size = key, size
        return best_key

    def extract(self, key: str) -> list[T]:
        """Remove group ``key`` and its members from every remaining group."""
        members = self._groups.pop(key)
        self.remove_members_everywhere(members.keys())
        return list(members.values())

    def extract_max_in_subset(
        self, keys: Optional[Iterable[str]] = None, min_size: int = 1
    ) -> Optional[tuple[str, list[T]]]:
        key = self.largest_in_subset(keys, min_size)
        if key is None:
            return None
        return key, self.extract(key)

    def remove_members_everywhere(self, member_uids: Iterable[str]) -> int:
        """Drop ``member_uids`` from all groups; returns the number of memberships removed."""
        uids = set(member_uids)
        removed = 0
        for members in self._groups.values():
            for uid in uids.intersection(members):
                del members[uid]
                removed += 1
        return removed

    def drop_empty(self) -> list[str]:
        empty = [key for key, members in self._groups.items() if not members]
        for key in empty:
            del self._groups[key]
        return empty

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, key: object) -> bool:
        return key in self._groups

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._groups))
