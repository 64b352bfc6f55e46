import pytest

from ndshape import (
    ErrorCode,
    IndexOutOfRangeError,
    InvalidLayoutError,
    InvalidShapeError,
    NotAMatrixError,
    Shape,
    ShapeError,
)


def test_shape_error_exposes_structured_fields() -> None:
    error = InvalidShapeError(
        "dimension at axis 0 must be >= -1, got -3",
        help="use -1 for an unknown dimension",
        related=("shape construction",),
        data={"axis": 0, "value": -3},
    )

    assert error.code == "invalid_shape"
    assert error.external_code == "INVALID_SHAPE"
    assert error.severity == "error"
    assert error.help == "use -1 for an unknown dimension"
    assert error.related == ("shape construction",)
    assert error.data == {"axis": 0, "value": -3}
    assert str(error) == "dimension at axis 0 must be >= -1, got -3"


@pytest.mark.parametrize(
    ("error_type", "code"),
    [
        (InvalidShapeError, ErrorCode.INVALID_SHAPE),
        (InvalidLayoutError, ErrorCode.INVALID_LAYOUT),
        (IndexOutOfRangeError, ErrorCode.INDEX_OUT_OF_RANGE),
        (NotAMatrixError, ErrorCode.NOT_A_MATRIX),
    ],
)
def test_each_error_type_carries_its_default_code(
    error_type: type[ShapeError], code: ErrorCode
) -> None:
    error = error_type("failure")
    assert error.code == code.value
    assert isinstance(error, ShapeError)
    assert isinstance(error, ValueError)


def test_explicit_code_overrides_default() -> None:
    error = InvalidShapeError("bad", code=ErrorCode.INDEX_OUT_OF_RANGE)
    assert error.code == "index_out_of_range"
    assert error.external_code == "INDEX_OUT_OF_RANGE"


def test_base_error_requires_code() -> None:
    with pytest.raises(TypeError):
        ShapeError("no code")


def test_error_rejects_blank_message() -> None:
    with pytest.raises(ValueError):
        InvalidShapeError("   ")


def test_error_rejects_blank_related_note() -> None:
    with pytest.raises(ValueError):
        InvalidShapeError("bad", related=(" ",))


def test_error_rejects_non_scalar_payload() -> None:
    with pytest.raises(TypeError):
        InvalidShapeError("bad", data={"dims": [1, 2]})  # type: ignore[dict-item]


def test_error_rejects_string_code() -> None:
    with pytest.raises(TypeError):
        InvalidShapeError("bad", code="invalid_shape")  # type: ignore[arg-type]


def test_errors_are_distinguishable_by_type() -> None:
    shape = Shape(2, 3, 4)
    raised: list[type[ShapeError]] = []
    for action in (
        lambda: Shape(-2),
        lambda: Shape((1,), layout="Z"),
        lambda: shape.get(3),
        lambda: shape.rows(),
    ):
        with pytest.raises(ShapeError) as error:
            action()
        raised.append(type(error.value))

    assert raised == [
        InvalidShapeError,
        InvalidLayoutError,
        IndexOutOfRangeError,
        NotAMatrixError,
    ]


def test_rejected_construction_is_logged_at_debug(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level("DEBUG", logger="ndshape.shape"):
        with pytest.raises(InvalidShapeError):
            Shape(2, -7)

    assert any("rejected shape" in record.getMessage() for record in caplog.records)
