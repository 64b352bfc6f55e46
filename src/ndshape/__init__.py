from .diagnostics import (
    ErrorCode,
    IndexOutOfRangeError,
    InvalidLayoutError,
    InvalidShapeError,
    NotAMatrixError,
    ShapeError,
)
from .layout import LayoutType, from_value, to_value
from .pairs import AxisPair, AxisPairs
from .shape import UNKNOWN_DIM, Shape
from .tensor_types import ShapedLike

__all__ = [
    "AxisPair",
    "AxisPairs",
    "ErrorCode",
    "IndexOutOfRangeError",
    "InvalidLayoutError",
    "InvalidShapeError",
    "LayoutType",
    "NotAMatrixError",
    "Shape",
    "ShapeError",
    "ShapedLike",
    "UNKNOWN_DIM",
    "from_value",
    "to_value",
]
