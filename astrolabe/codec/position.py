from __future__ import annotations

import logging
from typing import Any, Dict, Iterable

from astrolabe.codec.classifier import Code, decode_community
from astrolabe.codec.scalar import encode_altitude, encode_latitude, encode_longitude
from astrolabe.constructs.community import CommunitySet, CoordinateKind
from astrolabe.constructs.coordinate import Coordinate
from astrolabe.utils.crs import LATLON_CRS

log = logging.getLogger(__name__)


def encode_coordinate(coord: Coordinate) -> CommunitySet:
    """
    Encode a located point as its latitude, longitude and altitude communities.

    Points held in a CRS other than WGS84 are reprojected first.

    Args:
        coord: The point to encode

    Returns:
        The three community codes for the point

    Raises:
        InvalidInput: If any of the three values is NaN or infinite

    Examples:
        >>> coord = Coordinate.from_lat_lon(40.7128, -74.0060, altitude=10)
        >>> encode_coordinate(coord)
        CommunitySet(latitude=624366631, longitude=919758713, altitude=690000010)
    """
    if coord.crs != LATLON_CRS:
        log.debug("reprojecting %s from %s before encoding", coord.coordinate_id, coord.crs)
        coord = coord.to_crs(LATLON_CRS)

    return CommunitySet(
        latitude=encode_latitude(coord.y),
        longitude=encode_longitude(coord.x),
        altitude=encode_altitude(coord.altitude),
    )


def decode_communities(codes: Iterable[Code], coordinate_id: Any = None) -> Coordinate:
    """
    Rebuild a located point from the community codes published for it.

    The codes may arrive in any order; each one is classified by its value. A
    latitude and a longitude code are required, the altitude code is optional.

    Args:
        codes: The community payloads, as integers or 9-digit strings
        coordinate_id: An optional identifier for the resulting point

    Returns:
        A Coordinate in WGS84; its altitude is 0.0 when no altitude code was given

    Raises:
        MalformedCode: If any payload is not a 9-digit integer
        UnclassifiableCode: If any code lies outside the three ranges
        ValueError: If the same kind appears twice, or latitude or longitude is missing

    Examples:
        >>> coord = decode_communities(["910733802", "623818967"])
        >>> round(coord.latitude, 5), round(coord.longitude, 5), coord.altitude
        (37.7749, -122.4194, 0.0)
    """
    values: Dict[CoordinateKind, float] = {}
    for code in codes:
        decoded = decode_community(code)
        if decoded.kind in values:
            raise ValueError(f"found more than one {decoded.kind.value} community")
        values[decoded.kind] = decoded.value

    missing = [
        k.value
        for k in (CoordinateKind.LATITUDE, CoordinateKind.LONGITUDE)
        if k not in values
    ]
    if missing:
        raise ValueError(f"missing {' and '.join(missing)} community")

    return Coordinate.from_lat_lon(
        values[CoordinateKind.LATITUDE],
        values[CoordinateKind.LONGITUDE],
        altitude=values.get(CoordinateKind.ALTITUDE, 0.0),
        coordinate_id=coordinate_id,
    )
