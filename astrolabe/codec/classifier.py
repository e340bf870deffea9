from __future__ import annotations

import logging
import re
from numbers import Integral
from typing import Union

from astrolabe.codec.scalar import decode_altitude, decode_latitude, decode_longitude
from astrolabe.constructs.community import CoordinateKind, DecodedCommunity
from astrolabe.utils.exceptions import MalformedCode, UnclassifiableCode
from astrolabe.utils.ranges import CLASSIFICATION_ORDER, CODE_MAX, CODE_MIN

log = logging.getLogger(__name__)

CODE_PATTERN = re.compile(r"[0-9]{9}")

DECODERS = {
    CoordinateKind.LATITUDE: decode_latitude,
    CoordinateKind.LONGITUDE: decode_longitude,
    CoordinateKind.ALTITUDE: decode_altitude,
}

Code = Union[int, str]


def parse_code(code: Code) -> int:
    """
    Validate a raw community payload and return it as an integer.

    Args:
        code: An integer, or a string of exactly nine ASCII digits

    Returns:
        The payload as an int in [100,000,000, 999,999,999]

    Raises:
        MalformedCode: If the payload is not a 9-digit non-negative integer

    Examples:
        >>> parse_code("623818967")
        623818967
        >>> parse_code("62381896")
        Traceback (most recent call last):
        ...
        astrolabe.utils.exceptions.MalformedCode: ...
    """
    if isinstance(code, str):
        if not CODE_PATTERN.fullmatch(code):
            raise MalformedCode(f"expected exactly 9 digits, got {code!r}")
        value = int(code)
    elif isinstance(code, Integral) and not isinstance(code, bool):
        value = int(code)
    else:
        raise MalformedCode(
            f"expected a 9-digit integer or string, got {type(code).__name__}"
        )

    if not CODE_MIN <= value <= CODE_MAX:
        raise MalformedCode(f"{value} is not a 9-digit community code")

    return value


def classify_community(code: Code) -> CoordinateKind:
    """
    Work out which coordinate a community code carries, without decoding it.

    Classification compares the numeric value against each range in turn
    (longitude, then altitude, then latitude). Latitude and altitude codes both
    start with "6", so the leading digit alone is never enough.

    Args:
        code: An integer, or a string of exactly nine ASCII digits

    Returns:
        The kind of coordinate the code represents

    Raises:
        MalformedCode: If the payload is not a 9-digit non-negative integer
        UnclassifiableCode: If the code lies outside all three ranges
    """
    value = parse_code(code)
    for code_range in CLASSIFICATION_ORDER:
        if code_range.contains(value):
            return code_range.kind

    log.debug("rejecting community code %d; it lies in no defined range", value)
    raise UnclassifiableCode(value)


def decode_community(code: Code) -> DecodedCommunity:
    """
    Classify a community code and decode it with the matching decoder.

    Codes that fall between the defined ranges are rejected rather than decoded on a
    best-effort basis, since a code there can only come from upstream corruption.

    Args:
        code: An integer, or a string of exactly nine ASCII digits

    Returns:
        The coordinate kind together with the decoded value

    Raises:
        MalformedCode: If the payload is not a 9-digit non-negative integer
        UnclassifiableCode: If the code lies outside all three ranges

    Examples:
        >>> decode_community(600000000)
        DecodedCommunity(kind=<CoordinateKind.LATITUDE: 'latitude'>, value=-90.0)
        >>> decode_community("690000000")
        DecodedCommunity(kind=<CoordinateKind.ALTITUDE: 'altitude'>, value=0.0)
    """
    value = parse_code(code)
    kind = classify_community(value)
    return DecodedCommunity(kind, DECODERS[kind](value))
