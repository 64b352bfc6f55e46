from collections.abc import Iterator
from typing import NamedTuple

from .layout import LayoutType


class AxisPair(NamedTuple):
    """One axis of a shape: its size and its layout tag."""

    dimension: int
    layout: LayoutType


class AxisPairs:
    """Lazy, restartable view over the (dimension, layout) pairs of a shape.

    Each call to `iter()` starts a fresh pass in axis order; nothing is
    materialized up front.
    """

    __slots__ = ("_dimensions", "_layout")

    def __init__(
        self,
        dimensions: tuple[int, ...],
        layout: tuple[LayoutType, ...],
    ) -> None:
        self._dimensions = dimensions
        self._layout = layout

    def __iter__(self) -> Iterator[AxisPair]:
        for dimension, layout in zip(self._dimensions, self._layout, strict=True):
            yield AxisPair(dimension, layout)

    def __len__(self) -> int:
        return len(self._dimensions)

    def __repr__(self) -> str:
        rendered = ", ".join(
            f"({pair.dimension}, {pair.layout.name})" for pair in self
        )
        return f"AxisPairs([{rendered}])"


__all__ = ["AxisPair", "AxisPairs"]
