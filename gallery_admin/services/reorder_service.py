"""Drag-to-reorder of the host's selected media."""
from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence, TypeVar

from .catalog import PreviewPair

T = TypeVar("T")


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


def move_item(seq: Sequence[T], source: int, target: int) -> list[T]:
    """Copy of ``seq`` with the element at ``source`` reinserted at ``target``."""
    items = list(seq)
    item = items.pop(source)
    items.insert(target, item)
    return items


class DragReorder:
    """
    State machine over one drag gesture.

    The tracked index follows the dragged item, so successive drag-over
    events keep moving it from wherever it currently is.
    """

    def __init__(self) -> None:
        self.state = DragState.IDLE
        self.index: Optional[int] = None

    @property
    def is_dragging(self) -> bool:
        return self.state == DragState.DRAGGING

    def start(self, index: int) -> None:
        self.state = DragState.DRAGGING
        self.index = index

    def over(self, index: int, pair: PreviewPair) -> Optional[PreviewPair]:
        """
        Move the dragged item to ``index``.

        Args:
            index: Position currently hovered
            pair: Host-owned ids and previews

        Returns:
            The reordered pair, or None if nothing moved
        """
        if not self.is_dragging or self.index is None:
            return None
        if index == self.index:
            return None
        size = len(pair)
        if not (0 <= self.index < size and 0 <= index < size):
            return None

        moved = PreviewPair(
            tuple(move_item(pair.ids, self.index, index)),
            tuple(move_item(pair.previews, self.index, index)),
        )
        self.index = index
        return moved

    def end(self) -> None:
        """Drop or cancel; always returns to idle."""
        self.state = DragState.IDLE
        self.index = None
