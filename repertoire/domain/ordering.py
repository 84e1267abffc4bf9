"""Pure ordering logic for positioned collections.

A positioned collection is any parent-scoped list of entities carrying an
integer position: album tracks, playlist tracks, song sections, song
arrangements, band members and per-user reference lists. Positions within a
collection are unique and contiguous, starting at the collection's base.

All functions are immutable and side-effect free: they return new entity
instances (via attrs.evolve) and never touch persistence. Callers verify that
referenced IDs exist before calling in.
"""

from collections.abc import Iterable, Sequence
from typing import Any, TypeVar
from uuid import UUID

from attrs import define, evolve

T = TypeVar("T")


@define(frozen=True, slots=True)
class PositionScheme:
    """Describes where an entity keeps its position and which value is first."""

    field: str
    base: int = 0


# Album and playlist track numbers are 1-based, everything else 0-based.
ALBUM_TRACKS = PositionScheme("album_track_no", base=1)
PLAYLIST_SONGS = PositionScheme("song_track_no", base=1)
SONG_SECTIONS = PositionScheme("order")
SONG_ARRANGEMENTS = PositionScheme("order")
BAND_MEMBERS = PositionScheme("order")
REFERENCE_ITEMS = PositionScheme("order")


def position_of(item: Any, scheme: PositionScheme) -> int:
    """Read the position of an item according to the scheme."""
    return getattr(item, scheme.field)


def with_position(item: T, position: int, scheme: PositionScheme) -> T:
    """Return a copy of the item placed at the given position."""
    if position_of(item, scheme) == position:
        return item
    return evolve(item, **{scheme.field: position})


def sort_by_position(items: Iterable[T], scheme: PositionScheme) -> list[T]:
    """Return items ordered by ascending position."""
    return sorted(items, key=lambda item: position_of(item, scheme))


def assign_positions(items: Iterable[T], scheme: PositionScheme) -> list[T]:
    """Number items contiguously from the scheme's base in the given order."""
    return [
        with_position(item, scheme.base + index, scheme)
        for index, item in enumerate(items)
    ]


def move_within_collection(
    items: Iterable[T],
    moving_id: UUID,
    target_id: UUID,
    scheme: PositionScheme,
) -> list[T]:
    """Move one item onto the position currently held by another.

    Items between the two shift by one toward the vacated slot, so the
    collection stays contiguous. Moving an item onto itself is a no-op.

    Args:
        items: Every item of one collection, in any order
        moving_id: ID of the item being moved
        target_id: ID of the item whose position is the destination
        scheme: Position field and base of the collection

    Returns:
        The same items ordered by their new positions
    """
    ordered = sort_by_position(items, scheme)
    ids = [item.id for item in ordered]
    moving_index = ids.index(moving_id)
    target_index = ids.index(target_id)

    if moving_index == target_index:
        return ordered

    if moving_index < target_index:
        shifted, delta = range(moving_index + 1, target_index + 1), -1
    else:
        shifted, delta = range(target_index, moving_index), 1

    target_position = position_of(ordered[target_index], scheme)
    moved = list(ordered)
    for index in shifted:
        item = ordered[index]
        moved[index] = with_position(item, position_of(item, scheme) + delta, scheme)
    moved[moving_index] = with_position(ordered[moving_index], target_position, scheme)

    return sort_by_position(moved, scheme)


def renumber_after_removal(
    items: Iterable[T],
    removed_ids: Iterable[UUID],
    scheme: PositionScheme,
) -> list[T]:
    """Close the gaps left by removed items.

    Survivors keep their relative order and are renumbered from the base.
    Items whose IDs are listed in ``removed_ids`` are dropped first, so the
    full pre-removal collection can be passed as well.
    """
    removed = set(removed_ids)
    survivors = [item for item in items if item.id not in removed]
    return assign_positions(sort_by_position(survivors, scheme), scheme)


def append_position(items: Sequence[Any], scheme: PositionScheme) -> int:
    """Position a new item receives when appended to the collection."""
    return scheme.base + len(items)
