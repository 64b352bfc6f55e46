import logging
from collections.abc import Iterable
from enum import Enum

try:
    from typing import Self
except ImportError:  # pragma: no cover
    from typing_extensions import Self

from .diagnostics import InvalidLayoutError

logger = logging.getLogger(__name__)


class LayoutType(str, Enum):
    """Semantic tag of one tensor axis, encoded as a single character."""

    BATCH = "N"
    CHANNEL = "C"
    DEPTH = "D"
    HEIGHT = "H"
    WIDTH = "W"
    TIME = "T"
    UNKNOWN = "?"

    @classmethod
    def from_char(cls, char: str) -> Self:
        """Decode one layout character.

        Raises
        ------
        InvalidLayoutError
            If `char` is not the encoding of any layout tag.
        """
        try:
            return cls(char)
        except ValueError:
            logger.debug("rejected layout character %r", char)
            raise InvalidLayoutError(
                f"unrecognized layout character: {char!r}",
                help="use one of " + "".join(member.value for member in cls),
                related=("layout decoding",),
                data={"char": char if isinstance(char, str) else repr(char)},
            ) from None

    def to_char(self) -> str:
        """Return the single-character encoding of this tag."""
        return self.value


def from_value(layout: str) -> tuple[LayoutType, ...]:
    """Decode a compact layout string such as ``"NCHW"`` into layout tags."""
    if not isinstance(layout, str):
        raise TypeError("layout string must be a str")
    decoded: list[LayoutType] = []
    for position, char in enumerate(layout):
        try:
            decoded.append(LayoutType.from_char(char))
        except InvalidLayoutError as exc:
            raise InvalidLayoutError(
                f"unrecognized layout character {char!r} at position {position} "
                f"in {layout!r}",
                help=exc.help,
                related=("layout decoding",),
                data={"layout": layout, "char": char, "position": position},
            ) from None
    return tuple(decoded)


def to_value(layout: Iterable[LayoutType]) -> str:
    """Encode layout tags into their compact string form."""
    encoded: list[str] = []
    for tag in layout:
        if not isinstance(tag, LayoutType):
            raise TypeError("layout entries must be LayoutType members")
        encoded.append(tag.to_char())
    return "".join(encoded)


__all__ = ["LayoutType", "from_value", "to_value"]
