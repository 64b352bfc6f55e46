import logging
import operator
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from math import prod

try:
    from typing import Self
except ImportError:  # pragma: no cover
    from typing_extensions import Self

from .diagnostics import (
    IndexOutOfRangeError,
    InvalidShapeError,
    NotAMatrixError,
    ShapeError,
)
from .layout import LayoutType, from_value, to_value
from .pairs import AxisPairs
from .tensor_types import ShapedLike

logger = logging.getLogger(__name__)

UNKNOWN_DIM = -1

LayoutSpec = str | Iterable[LayoutType] | None


def _normalize_dimension(value: object, *, axis: int) -> int:
    """Validate one dimension value and return it as a plain `int`."""
    if isinstance(value, bool):
        raise InvalidShapeError(
            f"dimension at axis {axis} must be an integer, got bool",
            related=("shape construction",),
            data={"axis": axis},
        )
    try:
        dimension = operator.index(value)
    except TypeError:
        raise InvalidShapeError(
            f"dimension at axis {axis} must be an integer, got "
            f"{type(value).__name__}",
            related=("shape construction",),
            data={"axis": axis, "type": type(value).__name__},
        ) from None
    if dimension < UNKNOWN_DIM:
        raise InvalidShapeError(
            f"dimension at axis {axis} must be >= -1, got {dimension}",
            help="use -1 for an unknown dimension",
            related=("shape construction",),
            data={"axis": axis, "value": dimension},
        )
    return dimension


def _normalize_layout(layout: LayoutSpec, *, rank: int) -> tuple[LayoutType, ...]:
    """Resolve a layout spec to a tag tuple without checking its length."""
    if layout is None:
        return (LayoutType.UNKNOWN,) * rank
    if isinstance(layout, str):
        return from_value(layout)

    normalized: list[LayoutType] = []
    for tag in layout:
        if not isinstance(tag, LayoutType):
            raise InvalidShapeError(
                "layout entries must be LayoutType members",
                related=("shape construction",),
                data={"type": type(tag).__name__},
            )
        normalized.append(tag)
    return tuple(normalized)


@dataclass(frozen=True, slots=True, eq=False, init=False)
class Shape:
    """Immutable tensor shape with a semantic layout tag per axis.

    Dimensions are non-negative sizes or ``-1`` for an unknown size. Two
    shapes compare equal when their dimensions match; layout tags are
    descriptive only and never take part in equality or hashing.

    Examples
    --------
    >>> Shape(2, 3, 4).size()
    24
    >>> Shape((1, 3, 224, 224), layout="NCHW").slice(2)
    Shape((224, 224), layout='HW')
    """

    dimensions: tuple[int, ...]
    layout: tuple[LayoutType, ...]

    def __init__(self, *dimensions: object, layout: LayoutSpec = None) -> None:
        """Build one shape from dimensions and an optional layout.

        Parameters
        ----------
        *dimensions
            Either the dimension values themselves (``Shape(2, 3)``) or a
            single sequence of them (``Shape((2, 3))``). Passing another
            `Shape` copies its dimensions and, unless `layout` is given, its
            layout tags.
        layout
            Layout tags, a compact layout string such as ``"NC"``, or `None`
            for all-`UNKNOWN`.

        Raises
        ------
        InvalidShapeError
            If a dimension is below -1 or not an integer, or if the layout
            length differs from the number of dimensions.
        InvalidLayoutError
            If a layout string contains an unrecognized character.
        """
        if len(dimensions) == 1 and not _is_integral(dimensions[0]):
            candidate = dimensions[0]
            if isinstance(candidate, Shape) and layout is None:
                layout = candidate.layout
            if not isinstance(candidate, Iterable) or isinstance(candidate, str):
                raise InvalidShapeError(
                    "shape dimensions must be integers or one sequence of integers",
                    related=("shape construction",),
                    data={"type": type(candidate).__name__},
                )
            dimensions = tuple(candidate)

        try:
            normalized_dims = tuple(
                _normalize_dimension(value, axis=axis)
                for axis, value in enumerate(dimensions)
            )
            normalized_layout = _normalize_layout(layout, rank=len(normalized_dims))
            if len(normalized_layout) != len(normalized_dims):
                raise InvalidShapeError(
                    "shape and layout must have the same length: "
                    f"{len(normalized_dims)} dimensions, "
                    f"{len(normalized_layout)} layout tags",
                    related=("shape construction",),
                    data={
                        "rank": len(normalized_dims),
                        "layout_length": len(normalized_layout),
                    },
                )
        except ShapeError as exc:
            logger.debug("rejected shape %r with layout %r: %s", dimensions, layout, exc)
            raise

        object.__setattr__(self, "dimensions", normalized_dims)
        object.__setattr__(self, "layout", normalized_layout)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, LayoutType]]) -> Self:
        """Build one shape from (dimension, layout) pairs."""
        dimensions: list[object] = []
        layout: list[LayoutType] = []
        for axis, pair in enumerate(pairs):
            try:
                dimension, tag = pair
            except (TypeError, ValueError):
                logger.debug("rejected axis pair %r at axis %d", pair, axis)
                raise InvalidShapeError(
                    f"axis {axis} must be a (dimension, layout) pair, got {pair!r}",
                    related=("shape construction",),
                    data={"axis": axis},
                ) from None
            dimensions.append(dimension)
            layout.append(tag)
        return cls(tuple(dimensions), layout=tuple(layout))

    @classmethod
    def of(cls, tensor: ShapedLike, /, *, layout: LayoutSpec = None) -> Self:
        """Describe the shape of any object exposing a `.shape` tuple."""
        if not isinstance(tensor, ShapedLike):
            raise TypeError("Shape.of expects an object with a .shape attribute")
        return cls(tuple(tensor.shape), layout=layout)

    def get(self, axis: int) -> int:
        """Return the size of one axis."""
        self._check_axis(axis, operation="get")
        return self.dimensions[axis]

    def size(self, *axes: int) -> int:
        """Return the element count over `axes` (all axes when none given).

        Returns ``-1`` if any selected axis has an unknown size.
        """
        if axes:
            for axis in axes:
                self._check_axis(axis, operation="size")
            selected = tuple(self.dimensions[axis] for axis in axes)
        else:
            selected = self.dimensions
        if UNKNOWN_DIM in selected:
            return UNKNOWN_DIM
        return prod(selected)

    def rank(self) -> int:
        """Return the number of axes."""
        return len(self.dimensions)

    def unknown_count(self) -> int:
        """Return the number of axes with unknown size."""
        return self.dimensions.count(UNKNOWN_DIM)

    def head(self) -> int:
        """Return the size of the first axis."""
        if not self.dimensions:
            raise IndexOutOfRangeError(
                "cannot take the head of a scalar shape",
                related=("head",),
                data={"rank": 0},
            )
        return self.dimensions[0]

    def tail(self) -> int:
        """Return the size of the last axis."""
        if not self.dimensions:
            raise IndexOutOfRangeError(
                "cannot take the tail of a scalar shape",
                related=("tail",),
                data={"rank": 0},
            )
        return self.dimensions[-1]

    def leading_ones(self) -> int:
        """Count consecutive size-1 axes from the front."""
        count = 0
        for dimension in self.dimensions:
            if dimension != 1:
                break
            count += 1
        return count

    def trailing_ones(self) -> int:
        """Count consecutive size-1 axes from the back."""
        count = 0
        for dimension in reversed(self.dimensions):
            if dimension != 1:
                break
            count += 1
        return count

    def is_scalar(self) -> bool:
        return self.rank() == 0

    def is_matrix(self) -> bool:
        return self.rank() == 2

    def rows(self) -> int:
        """Return the number of rows of a rank-2 shape."""
        self._require_matrix("rows")
        return self.dimensions[0]

    def columns(self) -> int:
        """Return the number of columns of a rank-2 shape."""
        self._require_matrix("columns")
        return self.dimensions[1]

    def is_square(self) -> bool:
        self._require_matrix("is_square")
        return self.rows() == self.columns()

    def is_column_vector(self) -> bool:
        """Return whether this matrix has one column and more than one element."""
        self._require_matrix("is_column_vector")
        return self.columns() == 1 and self.size() > 1

    def is_row_vector(self) -> bool:
        """Return whether this matrix has one row and more than one element."""
        self._require_matrix("is_row_vector")
        return self.rows() == 1 and self.size() > 1

    def is_vector_matrix(self) -> bool:
        self._require_matrix("is_vector_matrix")
        return self.is_column_vector() or self.is_row_vector()

    def is_layout_known(self) -> bool:
        """Return whether every axis carries a layout tag other than `UNKNOWN`."""
        return LayoutType.UNKNOWN not in self.layout

    def to_layout_string(self) -> str:
        """Encode this shape's layout as a compact string such as ``"NCHW"``."""
        return to_value(self.layout)

    def slice(self, begin: int, end: int | None = None) -> Self:
        """Return the sub-shape over axes ``[begin, end)`` with its layout tags."""
        rank = self.rank()
        if end is None:
            end = rank
        for name, bound in (("begin", begin), ("end", end)):
            if not _is_integral(bound):
                raise IndexOutOfRangeError(
                    f"slice {name} must be an integer, got {bound!r}",
                    help="slice bounds must satisfy 0 <= begin <= end <= rank",
                    related=("slice",),
                    data={name: repr(bound), "rank": rank},
                )
        begin = operator.index(begin)
        end = operator.index(end)
        if not (0 <= begin <= rank) or not (0 <= end <= rank) or begin > end:
            raise IndexOutOfRangeError(
                f"invalid slice [{begin}, {end}) for shape of rank {rank}",
                help="slice bounds must satisfy 0 <= begin <= end <= rank",
                related=("slice",),
                data={"begin": begin, "end": end, "rank": rank},
            )
        return type(self)(self.dimensions[begin:end], layout=self.layout[begin:end])

    def concatenate(self, other: "Shape") -> Self:
        """Return this shape's axes followed by `other`'s axes."""
        if not isinstance(other, Shape):
            raise TypeError("can only concatenate Shape with Shape")
        return type(self)(
            self.dimensions + other.dimensions,
            layout=self.layout + other.layout,
        )

    def axis_pairs(self) -> AxisPairs:
        """Return a restartable view of (dimension, layout) pairs in axis order."""
        return AxisPairs(self.dimensions, self.layout)

    def filter_by_layout(self, predicate: Callable[[LayoutType], bool]) -> Self:
        """Keep only the axes whose layout tag satisfies `predicate`."""
        return type(self).from_pairs(
            pair for pair in self.axis_pairs() if predicate(pair.layout)
        )

    def map_axes(
        self,
        transform: Callable[[int, LayoutType], tuple[int, LayoutType]],
    ) -> Self:
        """Replace each axis with ``transform(dimension, layout)``.

        The result is validated like any newly constructed shape.
        """
        return type(self).from_pairs(
            transform(pair.dimension, pair.layout) for pair in self.axis_pairs()
        )

    def to_display_string(self) -> str:
        """Render dimensions as ``"(d0, d1, ...)"``."""
        return "(" + ", ".join(str(dimension) for dimension in self.dimensions) + ")"

    def _check_axis(self, axis: int, *, operation: str) -> None:
        rank = self.rank()
        if not _is_integral(axis) or not 0 <= axis < rank:
            raise IndexOutOfRangeError(
                f"axis {axis!r} is out of range for shape of rank {rank}",
                help=f"axis must be in [0, {rank})",
                related=(operation,),
                data={"axis": repr(axis), "rank": rank},
            )

    def _require_matrix(self, operation: str) -> None:
        if not self.is_matrix():
            raise NotAMatrixError(
                f"{operation} requires a rank-2 shape, got rank {self.rank()}",
                related=(operation,),
                data={"rank": self.rank(), "shape": self.to_display_string()},
            )

    def __len__(self) -> int:
        return len(self.dimensions)

    def __iter__(self) -> Iterator[int]:
        return iter(self.dimensions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return self.dimensions == other.dimensions

    def __hash__(self) -> int:
        return hash(self.dimensions)

    def __str__(self) -> str:
        return self.to_display_string()

    def __repr__(self) -> str:
        if any(tag is not LayoutType.UNKNOWN for tag in self.layout):
            return f"Shape({self.dimensions!r}, layout={self.to_layout_string()!r})"
        return f"Shape({self.dimensions!r})"


def _is_integral(value: object) -> bool:
    if isinstance(value, bool):
        return False
    try:
        operator.index(value)
    except TypeError:
        return False
    return True


__all__ = ["Shape", "UNKNOWN_DIM"]
