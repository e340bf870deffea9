from __future__ import annotations

import math
from typing import Any, NamedTuple

from pyproj import CRS, Transformer
from pyproj.exceptions import ProjError
from shapely.geometry import Point

from astrolabe.utils.crs import LATLON_CRS


class Coordinate(NamedTuple):
    """
    A located point: a 2D geometry in some CRS plus an altitude in meters.

    Community codes are defined in WGS84, but a Coordinate may be held in any CRS
    (for example a projected CRS from a site inventory); it is reprojected when the
    latitude and longitude are needed.

    Attributes:
        coordinate_id: An identifier for the point (any hashable value, or None)
        geom: The Shapely Point; x is the longitude/easting, y the latitude/northing
        crs: The pyproj CRS the geometry is expressed in
        altitude: Meters relative to sea level. Default is 0.0.

    Examples:
        >>> from astrolabe.constructs.coordinate import Coordinate
        >>> router = Coordinate.from_lat_lon(51.5074, -0.1278, altitude=35)
        >>> router.latitude, router.longitude, router.altitude
        (51.5074, -0.1278, 35.0)
    """

    coordinate_id: Any
    geom: Point
    crs: CRS
    altitude: float = 0.0

    def __repr__(self):
        crs_a = self.crs.to_authority() if self.crs else "Null"
        return (
            f"Coordinate(coordinate_id={self.coordinate_id}, x={self.x}, y={self.y}, "
            f"altitude={self.altitude}, crs={crs_a})"
        )

    @classmethod
    def from_lat_lon(
        cls, lat: float, lon: float, altitude: float = 0.0, coordinate_id: Any = None
    ) -> Coordinate:
        """
        Create a coordinate from WGS84 (EPSG:4326) latitude and longitude.

        Args:
            lat: The latitude in decimal degrees
            lon: The longitude in decimal degrees
            altitude: Meters relative to sea level. Default is 0.0.
            coordinate_id: An optional identifier for the point

        Returns:
            A new Coordinate in LATLON_CRS
        """
        return cls(
            coordinate_id=coordinate_id,
            geom=Point(lon, lat),
            crs=LATLON_CRS,
            altitude=float(altitude),
        )

    @property
    def x(self) -> float:
        return self.geom.x

    @property
    def y(self) -> float:
        return self.geom.y

    @property
    def latitude(self) -> float:
        return self.to_crs(LATLON_CRS).y

    @property
    def longitude(self) -> float:
        return self.to_crs(LATLON_CRS).x

    def to_crs(self, new_crs: Any) -> Coordinate:
        """
        Reproject this coordinate to a different CRS.

        The identifier and the altitude are carried over unchanged; only the 2D
        geometry is transformed. If the target CRS equals the current one the
        coordinate itself is returned.

        Args:
            new_crs: The target CRS; a pyproj.CRS, an "EPSG:XXXX" string, an integer
                EPSG code or anything else pyproj.CRS() accepts

        Returns:
            A Coordinate in the target CRS

        Raises:
            ValueError: If new_crs cannot be parsed, or if the transformation yields
                infinite values
        """
        try:
            new_crs = CRS(new_crs)
        except ProjError as e:
            raise ValueError(
                f"Could not parse incoming `new_crs` parameter: {new_crs}"
            ) from e

        if new_crs == self.crs:
            return self

        transformer = Transformer.from_crs(self.crs, new_crs, always_xy=True)
        new_x, new_y = transformer.transform(self.geom.x, self.geom.y)

        if math.isinf(new_x) or math.isinf(new_y):
            raise ValueError(
                f"Unable to convert {self.crs} ({self.geom.x}, {self.geom.y}) -> {new_crs} ({new_x}, {new_y})"
            )

        return self._replace(geom=Point(new_x, new_y), crs=new_crs)
