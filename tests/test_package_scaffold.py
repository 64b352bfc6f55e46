import ndshape
from ndshape import LayoutType, Shape, ShapedLike


class _FakeTensor:
    def __init__(self, shape: tuple[int, ...]) -> None:
        self.shape = shape


def test_public_surface_is_exported() -> None:
    for name in ndshape.__all__:
        assert hasattr(ndshape, name), name


def test_shaped_like_protocol_accepts_duck_typed_tensors() -> None:
    tensor = _FakeTensor((4, 1))
    assert isinstance(tensor, ShapedLike)
    assert not isinstance(object(), ShapedLike)
    assert Shape.of(tensor).is_column_vector()


def test_unknown_dim_sentinel() -> None:
    assert ndshape.UNKNOWN_DIM == -1
    assert Shape(ndshape.UNKNOWN_DIM).unknown_count() == 1


def test_layout_type_is_closed_enumeration() -> None:
    assert {tag.name for tag in LayoutType} == {
        "BATCH",
        "CHANNEL",
        "DEPTH",
        "HEIGHT",
        "WIDTH",
        "TIME",
        "UNKNOWN",
    }
