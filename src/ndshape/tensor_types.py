from typing import Protocol, runtime_checkable


@runtime_checkable
class ShapedLike(Protocol):
    """Any tensor-like object exposing its dimensions as a `.shape` tuple."""

    @property
    def shape(self) -> tuple[int, ...]:
        """Tensor shape."""
        ...
