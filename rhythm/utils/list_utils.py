"""
List splice helpers shared by the habit and task reorder paths.
"""

from typing import Callable, Optional, TypeVar

T = TypeVar("T")


def clamp_index(index: int, length: int) -> int:
    return max(0, min(index, length))


def move_item(items: list[T], from_index: int, to_index: int) -> list[T]:
    """Remove the item at from_index and insert it at the clamped to_index."""
    if not 0 <= from_index < len(items):
        return list(items)
    result = list(items)
    item = result.pop(from_index)
    result.insert(clamp_index(to_index, len(result)), item)
    return result


def find_index(items: list[T], predicate: Callable[[T], bool]) -> Optional[int]:
    for index, item in enumerate(items):
        if predicate(item):
            return index
    return None


def reorder_by_id(items: list[T], item_id: str, to_index: int, key: Callable[[T], str]) -> list[T]:
    """Move the item whose key() equals item_id; unknown ids leave the list as-is."""
    index = find_index(items, lambda item: key(item) == item_id)
    if index is None or index == to_index:
        return list(items)
    return move_item(items, index, to_index)
