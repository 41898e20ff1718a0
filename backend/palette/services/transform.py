"""
Palette Backend: Color Transform Pipeline
==========================================

What:  Turns stored color records into derived color objects carrying RGB
       channels plus chroma, hue, saturation, value (HSV) and luma.
Who:   ColorService.list_color_objects() for GET /colors; usable standalone.

Pipeline (one record):

    "#RRGGBB" ─▶ parse_hex ─▶ normalize_channels ─▶ find_extrema
                                                       │
                                  ┌────────────────────┴──────────────┐
                                  ▼                                   ▼
                             derive_hsv                          compute_luma
                                  └────────────────┬──────────────────┘
                                                   ▼
                                          build_color_object

    transform_colors() maps that pipeline over a sequence, keeping order.

Everything here is pure: no I/O, no settings, no shared state.
"""

import string
from typing import Iterable, List, NamedTuple, Tuple

from palette.exceptions import MalformedHexError
from palette.schemas.color import ColorObject, ColorRecord

HEX_LENGTH = 7
_HEX_DIGITS = frozenset(string.hexdigits)

# (channel name, slice start, slice end) within "#RRGGBB"
CHANNEL_SLICES = (
    ("red", 1, 3),
    ("green", 3, 5),
    ("blue", 5, 7),
)

# Fixed, non gamma-corrected weights
LUMA_WEIGHTS = (0.3, 0.59, 0.11)


class HSV(NamedTuple):
    chroma: float
    hue: float
    saturation: float
    value: float


def _parse_channel(hex_value: str, channel: str, start: int, end: int) -> int:
    substring = hex_value[start:end]
    if len(substring) != 2 or not all(c in _HEX_DIGITS for c in substring):
        raise MalformedHexError(hex_value, channel=channel, substring=substring)
    return int(substring, 16)


def parse_hex(hex_value: str) -> Tuple[int, int, int]:
    """
    Parse "#RRGGBB" into (red, green, blue) integers in [0, 255].

    Each channel is read and checked on its own; the first channel that
    fails raises MalformedHexError naming that channel and its substring.
    Case-insensitive. Strings of the wrong length or without the leading
    '#' are rejected as well.
    """
    if not isinstance(hex_value, str) or not hex_value.startswith("#"):
        raise MalformedHexError(str(hex_value))

    channels = [
        _parse_channel(hex_value, channel, start, end)
        for channel, start, end in CHANNEL_SLICES
    ]

    # All three channels read fine but there is trailing junk
    if len(hex_value) != HEX_LENGTH:
        raise MalformedHexError(hex_value)

    red, green, blue = channels
    return red, green, blue


def normalize_channels(red: int, green: int, blue: int) -> Tuple[float, float, float]:
    """Scale 8-bit channels to floats in [0.0, 1.0]."""
    return red / 255.0, green / 255.0, blue / 255.0


def find_extrema(r: float, g: float, b: float) -> Tuple[float, float]:
    """Return (min, max) of the normalized channels."""
    return min(r, g, b), max(r, g, b)


def derive_hsv(r: float, g: float, b: float, lo: float, hi: float) -> HSV:
    """
    Derive chroma, hue, saturation and value from normalized channels.

    Hue branches are tried red, green, blue in that order, so when two
    channels share the maximum the earlier one decides the formula.
    Achromatic colors (saturation 0) get hue 0.
    """
    chroma = hi - lo
    value = hi
    saturation = 0.0 if value == 0 else chroma / value

    hue = 0.0
    if saturation > 0:
        if r == hi:
            hue = 60 * (((g - lo) - (b - lo)) / chroma)
            if hue < 0:
                hue += 360
        elif g == hi:
            hue = 120 + 60 * (((b - lo) - (r - lo)) / chroma)
        elif b == hi:
            hue = 240 + 60 * (((r - lo) - (g - lo)) / chroma)

    return HSV(chroma=chroma, hue=hue, saturation=saturation, value=value)


def compute_luma(r: float, g: float, b: float) -> float:
    """
    Weighted brightness: 0.3 R + 0.59 G + 0.11 B over normalized channels.

    Float rounding keeps the result at or just below 1.0 for white
    (0.9999999999999999), never above; compare with a tolerance.
    """
    wr, wg, wb = LUMA_WEIGHTS
    return wr * r + wg * g + wb * b


def build_color_object(record: ColorRecord) -> ColorObject:
    """
    Run the full pipeline for one record.

    Identity fields (id, name, hex) are copied verbatim.

    Raises:
        MalformedHexError: the record's hex does not parse
    """
    red, green, blue = parse_hex(record.hex)
    r, g, b = normalize_channels(red, green, blue)
    lo, hi = find_extrema(r, g, b)
    hsv = derive_hsv(r, g, b, lo, hi)

    return ColorObject(
        id=record.id,
        name=record.name,
        hex=record.hex,
        red=red,
        green=green,
        blue=blue,
        chroma=hsv.chroma,
        hue=hsv.hue,
        saturation=hsv.saturation,
        value=hsv.value,
        luma=compute_luma(r, g, b),
    )


def transform_colors(records: Iterable[ColorRecord]) -> List[ColorObject]:
    """
    Map build_color_object over records, preserving input order.

    Failure policy is fail-fast: the first malformed record aborts the whole
    batch. The raised MalformedHexError gets the record id added to its
    context so the bad row can be found. No partial result is returned.
    """
    objects: List[ColorObject] = []
    for record in records:
        try:
            objects.append(build_color_object(record))
        except MalformedHexError as e:
            e.context["record_id"] = record.id
            raise
    return objects
