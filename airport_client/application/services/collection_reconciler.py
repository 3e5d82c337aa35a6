"""Minimal-change reconciliation between two snapshots of a collection.

Given the list currently on screen and a freshly fetched one, compute the
removals, insertions, moves and content changes needed to turn the first
into the second, so the view can update incrementally.
"""
import bisect
import logging
from dataclasses import dataclass, field
from operator import attrgetter, eq
from typing import Any, Callable, Dict, Generic, Hashable, List, Sequence, Tuple, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class EditScript(Generic[T]):
    """
    Edit script turning an old list into a new one.

    Attributes:
        removed: Keys of old items absent from the new list, in old order
        inserted: (new index, item) for items absent from the old list
        moved: (key, old index, new index) for retained items that change place
        changed: (new index, item) for retained items whose content differs
        is_empty: Whether the new list is empty
    """

    removed: Tuple[Hashable, ...] = ()
    inserted: Tuple[Tuple[int, T], ...] = ()
    moved: Tuple[Tuple[Hashable, int, int], ...] = ()
    changed: Tuple[Tuple[int, T], ...] = ()
    is_empty: bool = True

    @property
    def has_changes(self) -> bool:
        return bool(self.removed or self.inserted or self.moved or self.changed)


def _longest_increasing_run(values: Sequence[int]) -> set:
    """Indexes (into ``values``) of one longest strictly increasing subsequence."""
    tails: List[int] = []          # values[...] of smallest tail per length
    tail_index: List[int] = []     # index into values for each tail
    parents: List[int] = [-1] * len(values)

    for i, value in enumerate(values):
        pos = bisect.bisect_left(tails, value)
        if pos > 0:
            parents[i] = tail_index[pos - 1]
        if pos == len(tails):
            tails.append(value)
            tail_index.append(i)
        else:
            tails[pos] = value
            tail_index[pos] = i

    keep = set()
    i = tail_index[-1] if tail_index else -1
    while i != -1:
        keep.add(i)
        i = parents[i]
    return keep


@dataclass
class CollectionReconciler(Generic[T]):
    """
    Generic reconciler parameterized by identity and content equality.

    Args:
        key: Extracts the identity key of an item
        same_content: Full content comparison, ``==`` by default
    """

    key: Callable[[T], Hashable]
    same_content: Callable[[T, T], bool] = field(default=eq)
    name: str = "collection"

    def _index(self, items: Sequence[T], label: str) -> Dict[Hashable, int]:
        index: Dict[Hashable, int] = {}
        for position, item in enumerate(items):
            item_key = self.key(item)
            if item_key in index:
                raise ValueError(f"Duplicate id {item_key!r} in {label} {self.name} list")
            index[item_key] = position
        return index

    def diff(self, old: Sequence[T], new: Sequence[T]) -> EditScript[T]:
        """
        Compute the edit script from ``old`` to ``new``.

        Neither input is modified. Runs in linear expected time apart from
        the ordering pass, which is O(n log n) in the number of retained items.

        Raises:
            ValueError: If either list contains duplicate ids
        """
        old_index = self._index(old, "old")
        new_index = self._index(new, "new")

        removed = tuple(self.key(item) for item in old if self.key(item) not in new_index)

        inserted = []
        changed = []
        retained: List[Tuple[int, int]] = []  # (old position, new position) in new order
        for new_position, item in enumerate(new):
            old_position = old_index.get(self.key(item))
            if old_position is None:
                inserted.append((new_position, item))
                continue
            retained.append((old_position, new_position))
            if not self.same_content(old[old_position], item):
                changed.append((new_position, item))

        stationary = _longest_increasing_run([old_position for old_position, _ in retained])
        moved = tuple(
            (self.key(new[new_position]), old_position, new_position)
            for i, (old_position, new_position) in enumerate(retained)
            if i not in stationary
        )

        script = EditScript(
            removed=removed,
            inserted=tuple(inserted),
            moved=moved,
            changed=tuple(changed),
            is_empty=len(new) == 0,
        )
        logger.debug(
            f"Reconciled {self.name}: {len(removed)} removed, {len(inserted)} inserted, "
            f"{len(moved)} moved, {len(changed)} changed"
        )
        return script

    def apply(self, old: Sequence[T], script: EditScript[T]) -> List[T]:
        """
        Replay an edit script on ``old`` and return the resulting list.

        Removals go first, then moved items are lifted out, and finally
        insertions and moves are placed in ascending target order.
        """
        removed = set(script.removed)
        moved_keys = {item_key for item_key, _, _ in script.moved}
        replacements = {self.key(item): item for _, item in script.changed}

        by_key = {self.key(item): item for item in old}
        result = [
            replacements.get(self.key(item), item)
            for item in old
            if self.key(item) not in removed and self.key(item) not in moved_keys
        ]

        placements: List[Tuple[int, Any]] = list(script.inserted)
        for item_key, _, new_position in script.moved:
            placements.append((new_position, replacements.get(item_key, by_key[item_key])))
        for new_position, item in sorted(placements, key=lambda placement: placement[0]):
            result.insert(new_position, item)
        return result


def flight_reconciler() -> CollectionReconciler:
    """Reconciler for flights, keyed by flight id."""
    return CollectionReconciler(key=attrgetter("id"), name="flights")


def booking_reconciler() -> CollectionReconciler:
    """Reconciler for bookings, keyed by booking id."""
    return CollectionReconciler(key=attrgetter("id"), name="bookings")
