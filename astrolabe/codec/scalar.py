from __future__ import annotations

import math
import sys
from numbers import Integral
from typing import Any

import numpy as np

from astrolabe.utils.exceptions import InvalidInput, MalformedCode
from astrolabe.utils.ranges import (
    ALT_BASE,
    ALT_MAX,
    LAT_BASE,
    LAT_MAX,
    LAT_MIN,
    LAT_SCALE,
    LON_BASE,
    LON_MAX,
    LON_MIN,
    LON_SCALE,
)


def finite_value(value: Any, name: str) -> float:
    """
    Convert an encoder input to a float, rejecting anything that is not a finite real.

    Finite values too large for a float (huge ints, Fractions) lie beyond every
    domain, so they become the largest float of the same sign and saturate when
    clamped.

    Args:
        value: The raw input
        name: The quantity being encoded, used in error messages

    Returns:
        The value as a finite float

    Raises:
        InvalidInput: If value is NaN, infinite, boolean or not a number
    """
    if isinstance(value, (bool, np.bool_, str, bytes)):
        raise InvalidInput(f"{name} must be a real number, got {value!r}")
    try:
        converted = float(value)
    except OverflowError:
        converted = math.copysign(sys.float_info.max, 1 if value > 0 else -1)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"{name} must be a real number, got {value!r}") from e
    if not math.isfinite(converted):
        raise InvalidInput(f"{name} must be finite, got {converted}")
    return converted


def _as_code(code: Any) -> int:
    """Internal use."""
    if isinstance(code, (bool, np.bool_)) or not isinstance(code, Integral):
        raise MalformedCode(f"community code must be an integer, got {code!r}")
    return int(code)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_away(value: float) -> int:
    """
    Round to the nearest integer, with ties going away from zero.

    This is the rounding rule the deployed encoders use, so it must be kept to stay
    wire-compatible. Python's built-in round() goes to the even neighbour instead.

    Args:
        value: A finite float

    Returns:
        The nearest integer, e.g. 2.5 -> 3 and -2.5 -> -3
    """
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if value < 0 else whole


def _encode_angle(
    value: Any, name: str, low: float, high: float, scale: int, base: int
) -> int:
    angle = clamp(finite_value(value, name), low, high)
    return base + round_half_away((angle - low) * scale / (high - low))


def _decode_angle(code: Any, low: float, high: float, scale: int, base: int) -> float:
    # a code below its base saturates to the bottom of the domain
    steps = max(_as_code(code) - base, 0)
    return clamp(steps * (high - low) / scale + low, low, high)


def encode_latitude(lat: float) -> int:
    """
    Encode a latitude as a community code.

    Out-of-range latitudes are not an error: they saturate to -90 or 90.

    Args:
        lat: The latitude in decimal degrees

    Returns:
        A code in [600,000,000, 633,554,431]

    Raises:
        InvalidInput: If lat is NaN, infinite or not a number

    Examples:
        >>> encode_latitude(37.7749)
        623818967
        >>> encode_latitude(200)
        633554431
    """
    return _encode_angle(lat, "latitude", LAT_MIN, LAT_MAX, LAT_SCALE, LAT_BASE)


def encode_longitude(lon: float) -> int:
    """
    Encode a longitude as a community code.

    Out-of-range longitudes saturate to -180 or 180; they are not wrapped around.

    Args:
        lon: The longitude in decimal degrees

    Returns:
        A code in [900,000,000, 967,108,863]

    Raises:
        InvalidInput: If lon is NaN, infinite or not a number

    Examples:
        >>> encode_longitude(-122.4194)
        910733802
    """
    return _encode_angle(lon, "longitude", LON_MIN, LON_MAX, LON_SCALE, LON_BASE)


def encode_altitude(alt: float) -> int:
    """
    Encode an altitude as a community code.

    The altitude is clamped to +/-8,388,607 meters and rounded to the nearest meter.

    Args:
        alt: The altitude in meters relative to sea level

    Returns:
        A code in [681,611,393, 698,388,607], with sea level at 690,000,000

    Raises:
        InvalidInput: If alt is NaN, infinite or not a number

    Examples:
        >>> encode_altitude(-100)
        689999900
    """
    meters = clamp(finite_value(alt, "altitude"), -ALT_MAX, ALT_MAX)
    return ALT_BASE + round_half_away(meters)


def decode_latitude(code: int) -> float:
    """
    Decode a latitude community code.

    Codes below the latitude base decode to -90 and codes above the range decode to
    90. Use decode_community when the code has not been range-checked yet.

    Args:
        code: A latitude community code

    Returns:
        The latitude in decimal degrees, within one quantization step
        (180 / (2^25 - 1) degrees) of the encoded value

    Raises:
        MalformedCode: If code is not an integer
    """
    return _decode_angle(code, LAT_MIN, LAT_MAX, LAT_SCALE, LAT_BASE)


def decode_longitude(code: int) -> float:
    """
    Decode a longitude community code.

    Args:
        code: A longitude community code

    Returns:
        The longitude in decimal degrees, within one quantization step
        (360 / (2^26 - 1) degrees) of the encoded value

    Raises:
        MalformedCode: If code is not an integer
    """
    return _decode_angle(code, LON_MIN, LON_MAX, LON_SCALE, LON_BASE)


def decode_altitude(code: int) -> float:
    """
    Decode an altitude community code back to meters.

    Args:
        code: An altitude community code

    Returns:
        The altitude in meters, bounded to +/-8,388,607

    Raises:
        MalformedCode: If code is not an integer
    """
    return float(clamp(_as_code(code) - ALT_BASE, -ALT_MAX, ALT_MAX))
