from enum import Enum
from typing import ClassVar, Literal, TypeAlias

DiagnosticSeverity: TypeAlias = Literal["error"]
DiagnosticValue: TypeAlias = str | int | bool


class ErrorCode(str, Enum):
    """Canonical internal diagnostic codes."""

    INVALID_SHAPE = "invalid_shape"
    INVALID_LAYOUT = "invalid_layout"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    NOT_A_MATRIX = "not_a_matrix"


class ShapeError(ValueError):
    """Structured base error for shape and layout diagnostics.

    Subclasses fix `default_code`; `code` and `external_code` are derived
    from that `ErrorCode` member.
    """

    default_code: ClassVar[ErrorCode | None] = None
    severity: DiagnosticSeverity
    code: str
    external_code: str
    help: str | None
    related: tuple[str, ...]
    data: dict[str, DiagnosticValue]
    message: str

    @staticmethod
    def _check_related(related: tuple[str, ...]) -> tuple[str, ...]:
        """Reject non-string or blank related notes."""
        notes = tuple(related)
        if not all(isinstance(note, str) for note in notes):
            raise TypeError("related notes must be strings")
        if not all(note.strip() for note in notes):
            raise ValueError("related notes cannot be blank")
        return notes

    @staticmethod
    def _check_data(data: dict[str, DiagnosticValue]) -> dict[str, DiagnosticValue]:
        """Copy the payload, keeping it flat and serializable."""
        if not all(isinstance(key, str) for key in data):
            raise TypeError("diagnostic data keys must be strings")
        if not all(isinstance(value, str | int | bool) for value in data.values()):
            raise TypeError("diagnostic data values must be str, int, or bool")
        return dict(data)

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | None = None,
        help: str | None = None,
        related: tuple[str, ...] = (),
        data: dict[str, DiagnosticValue] | None = None,
    ) -> None:
        """Build one structured shape error.

        Parameters
        ----------
        message
            Human-readable failure description, also used as `str(error)`.
        code
            Diagnostic code; defaults to the subclass `default_code`.
        help
            Optional remediation hint.
        related
            Short notes naming the operation or input involved.
        data
            Flat payload of `str`, `int` or `bool` values.
        """
        if code is None:
            code = type(self).default_code
        if not isinstance(code, ErrorCode):
            raise TypeError(f"{type(self).__name__} requires an ErrorCode")
        if not isinstance(message, str):
            raise TypeError("diagnostic message must be a string")
        if not message.strip():
            raise ValueError("diagnostic message cannot be empty")
        if help is not None and not isinstance(help, str):
            raise TypeError("diagnostic help must be a string or None")

        self.code = code.value
        self.external_code = code.name
        self.severity = "error"
        self.help = help
        self.related = self._check_related(related)
        self.data = self._check_data({} if data is None else data)
        self.message = message
        super().__init__(message)


class InvalidShapeError(ShapeError):
    """Dimension below -1, non-integer dimension, or dimension/layout length mismatch."""

    default_code = ErrorCode.INVALID_SHAPE


class InvalidLayoutError(ShapeError):
    """Unrecognized layout character."""

    default_code = ErrorCode.INVALID_LAYOUT


class IndexOutOfRangeError(ShapeError, IndexError):
    """Axis index or slice bound outside the shape's rank."""

    default_code = ErrorCode.INDEX_OUT_OF_RANGE


class NotAMatrixError(ShapeError):
    """Matrix-only query on a shape whose rank is not 2."""

    default_code = ErrorCode.NOT_A_MATRIX


__all__ = [
    "ErrorCode",
    "ShapeError",
    "InvalidShapeError",
    "InvalidLayoutError",
    "IndexOutOfRangeError",
    "NotAMatrixError",
]
