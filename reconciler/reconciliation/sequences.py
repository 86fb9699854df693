"""Helpers for sequences that may be missing or contain missing groups."""

from typing import Callable, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


def safe_iter(sequence: Optional[Iterable[T]]) -> Iterator[T]:
    """Iterate a possibly-absent sequence; ``None`` behaves as empty."""
    if sequence is None:
        return iter(())
    return iter(sequence)


def flatten_groups(
    groups: Optional[Iterable[Optional[Iterable[T]]]],
    on_missing_group: Optional[Callable[[int], None]] = None,
) -> Iterator[T]:
    """
    Yield every element of every group, in order.

    Missing groups are skipped. Each source is iterated exactly once, so
    generators and other single-pass iterables are fine.

    Args:
        groups: Sequence of groups, or None
        on_missing_group: Called with the position of each missing group
    """
    for position, group in enumerate(safe_iter(groups)):
        if group is None:
            if on_missing_group is not None:
                on_missing_group(position)
            continue
        yield from group
