from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, NamedTuple

MAX_ASN = 65535


class CoordinateKind(Enum):
    """
    The quantity a community code carries.

    Every code falls in exactly one of three disjoint sub-ranges, and the sub-range
    alone determines which of these kinds the code represents.

    Values:
        LATITUDE: Degrees north (positive) or south (negative) of the equator
        LONGITUDE: Degrees east (positive) or west (negative) of the prime meridian
        ALTITUDE: Whole meters above (positive) or below (negative) sea level
    """

    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    ALTITUDE = "altitude"

    @property
    def unit(self) -> str:
        if self is CoordinateKind.ALTITUDE:
            return "meters"
        return "degrees"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class DecodedCommunity(NamedTuple):
    """
    The result of classifying and decoding a single community code.

    The kind always travels with the value so that a decoded number can never be
    mistaken for a different coordinate.

    Attributes:
        kind: Which coordinate the code carried
        value: The decoded value, in degrees for latitude/longitude and meters for altitude

    Examples:
        >>> from astrolabe.codec.classifier import decode_community
        >>> decoded = decode_community(690000015)
        >>> decoded.kind
        <CoordinateKind.ALTITUDE: 'altitude'>
        >>> decoded.describe()
        'Altitude: 15 meters'
    """

    kind: CoordinateKind
    value: float

    def describe(self) -> str:
        """
        Render the decoded value the way operators read it.

        Degrees are shown with five decimal places (about one meter at the equator);
        altitude is shown in whole meters.

        Returns:
            A string such as "Latitude: 37.77490" or "Altitude: 15 meters"
        """
        if self.kind is CoordinateKind.ALTITUDE:
            return f"{self.kind.label}: {self.value:.0f} meters"
        return f"{self.kind.label}: {self.value:.5f}"

    def to_json(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "value": self.value}

    @classmethod
    def from_json(cls, json: Dict[str, Any]) -> DecodedCommunity:
        return cls(CoordinateKind(json["kind"]), float(json["value"]))


class CommunitySet(NamedTuple):
    """
    The three community codes that together publish one location.

    Attributes:
        latitude: The latitude code, in [600,000,000, 633,554,431]
        longitude: The longitude code, in [900,000,000, 967,108,863]
        altitude: The altitude code, in [681,611,393, 698,388,607]

    Examples:
        >>> from astrolabe.codec.position import encode_coordinate
        >>> from astrolabe.constructs.coordinate import Coordinate
        >>> communities = encode_coordinate(Coordinate.from_lat_lon(37.7749, -122.4194, 15))
        >>> communities.to_list()
        [623818967, 910733802, 690000015]
        >>> communities.to_communities(64512)
        ['64512:623818967', '64512:910733802', '64512:690000015']
    """

    latitude: int
    longitude: int
    altitude: int

    def to_list(self) -> List[int]:
        return [self.latitude, self.longitude, self.altitude]

    def to_json(self) -> Dict[str, Any]:
        return self._asdict()

    @classmethod
    def from_json(cls, json: Dict[str, Any]) -> CommunitySet:
        return cls(
            latitude=int(json["latitude"]),
            longitude=int(json["longitude"]),
            altitude=int(json["altitude"]),
        )

    def to_communities(self, asn: int) -> List[str]:
        """
        Render the codes as "ASN:value" community strings for display.

        Args:
            asn: The 16-bit autonomous system number to prefix each code with

        Returns:
            The latitude, longitude and altitude communities, in that order

        Raises:
            ValueError: If the asn is not an integer in [0, 65535]
        """
        if isinstance(asn, bool) or not isinstance(asn, int) or not 0 <= asn <= MAX_ASN:
            raise ValueError(f"asn must be an integer in [0, {MAX_ASN}], got {asn!r}")
        return [f"{asn}:{code}" for code in self.to_list()]
