"""RGBA color values and the named brush palette.

Provides:
    - Color: immutable 4-channel (R, G, B, A) value, uint8 per channel
    - PALETTE: named colors available to brushes and configs
    - Color.parse(): build a Color from a palette name, hex string or sequence

All channels are unsigned 8-bit integers [0, 255]. Channel order is always
R, G, B, A, matching the byte layout of PixelBuffer.

Usage:
    from src.utils.color import Color, PALETTE
    red = PALETTE["red"]
    teal = Color.parse("#008080")
    half_blue = Color.parse([0, 0, 255, 128])
"""

from typing import Dict, NamedTuple, Optional, Sequence, Union


ColorLike = Union["Color", str, Sequence[int]]


class Color(NamedTuple):
    """RGBA color, one unsigned byte per channel."""
    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def parse(
        cls,
        value: ColorLike,
        palette: Optional[Dict[str, "Color"]] = None
    ) -> "Color":
        """Build a Color from a flexible description.

        Parameters
        ----------
        value : Color, str or sequence of int
            - Color instance (channels re-checked, since Color(300, 0, 0) is constructible)
            - palette name, e.g. "red"
            - hex string "#RRGGBB" or "#RRGGBBAA"
            - sequence of 3 or 4 ints (alpha defaults to 255)
        palette : dict, optional
            Name lookup table, default PALETTE

        Returns
        -------
        Color
            Validated color

        Raises
        ------
        ValueError
            Unknown palette name, malformed hex, wrong channel count or a
            channel outside [0, 255]
        """
        palette = PALETTE if palette is None else palette

        if isinstance(value, str):
            text = value.strip()
            if text.startswith('#'):
                return cls._from_hex(text)
            key = text.lower()
            if key not in palette:
                raise ValueError(
                    f"Unknown color name '{value}'. Known: {sorted(palette)}"
                )
            return palette[key]

        channels = list(value)
        if len(channels) not in (3, 4):
            raise ValueError(
                f"Color needs 3 or 4 channels (RGB[A]), got {len(channels)}: {channels}"
            )
        for ch in channels:
            if isinstance(ch, bool) or not isinstance(ch, int):
                raise ValueError(f"Color channels must be ints, got {ch!r}")
            if not 0 <= ch <= 255:
                raise ValueError(f"Color channel {ch} outside [0, 255]")
        return cls(*channels)

    @classmethod
    def _from_hex(cls, text: str) -> "Color":
        digits = text[1:]
        if len(digits) not in (6, 8):
            raise ValueError(f"Hex color must be #RRGGBB or #RRGGBBAA, got '{text}'")
        try:
            channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        except ValueError as e:
            raise ValueError(f"Invalid hex color '{text}'") from e
        return cls(*channels)

    def to_hex(self) -> str:
        """Format as "#RRGGBBAA"."""
        return "#{:02x}{:02x}{:02x}{:02x}".format(*self)


TRANSPARENT = Color(0, 0, 0, 0)

PALETTE: Dict[str, Color] = {
    'red': Color(255, 0, 0, 255),
    'black': Color(0, 0, 0, 255),
    'white': Color(255, 255, 255, 255),
    'transparent': TRANSPARENT,
}


def build_palette(extra: Optional[Dict[str, ColorLike]] = None) -> Dict[str, Color]:
    """Return the default palette extended with user-defined colors.

    Entries in ``extra`` may reference default palette names. Names are
    case-insensitive and stored lower-case.
    """
    palette = dict(PALETTE)
    for name, value in (extra or {}).items():
        palette[name.lower()] = Color.parse(value, palette)
    return palette
