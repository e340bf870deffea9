"""The range table that every encoder, decoder and the classifier relies on.

Each coordinate kind owns one disjoint sub-range of the 32-bit community space:

- Latitude:  600,000,000 to 633,554,431 (25 bits)
- Altitude:  681,611,393 to 698,388,607 (24-bit signed meters around 690,000,000)
- Longitude: 900,000,000 to 967,108,863 (26 bits)

These numbers must not change: existing deployments decode codes with them.
"""

from __future__ import annotations

from typing import NamedTuple

from astrolabe.constructs.community import CoordinateKind

# 25 bits of latitude resolution, roughly 0.6 meters per step
LAT_SCALE = (1 << 25) - 1
LAT_BASE = 600_000_000
LAT_MIN = -90.0
LAT_MAX = 90.0

# 26 bits of longitude resolution, roughly 0.6 meters per step at the equator
LON_SCALE = (1 << 26) - 1
LON_BASE = 900_000_000
LON_MIN = -180.0
LON_MAX = 180.0

# Sea level sits at ALT_BASE; the offset is a 24-bit signed meter count
ALT_BASE = 690_000_000
ALT_MAX = 8_388_607

# The window of 9-digit payloads a community value can carry
CODE_MIN = 100_000_000
CODE_MAX = 999_999_999


class CodeRange(NamedTuple):
    """
    A closed interval of community codes owned by one coordinate kind.

    Attributes:
        kind: The coordinate kind encoded in this interval
        low: The smallest code in the interval
        high: The largest code in the interval
    """

    kind: CoordinateKind
    low: int
    high: int

    @property
    def size(self) -> int:
        return self.high - self.low + 1

    def contains(self, code: int) -> bool:
        return self.low <= code <= self.high


LATITUDE_RANGE = CodeRange(CoordinateKind.LATITUDE, LAT_BASE, LAT_BASE + LAT_SCALE)
ALTITUDE_RANGE = CodeRange(
    CoordinateKind.ALTITUDE, ALT_BASE - ALT_MAX, ALT_BASE + ALT_MAX
)
LONGITUDE_RANGE = CodeRange(CoordinateKind.LONGITUDE, LON_BASE, LON_BASE + LON_SCALE)

# latitude and altitude share a leading "6"; the numeric order below settles them
CLASSIFICATION_ORDER = (LONGITUDE_RANGE, ALTITUDE_RANGE, LATITUDE_RANGE)
