from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
import pandas as pd
from geopandas import GeoDataFrame, points_from_xy, read_file
from pyproj import CRS

from astrolabe.codec.classifier import decode_community
from astrolabe.codec.scalar import finite_value
from astrolabe.constructs.community import CoordinateKind
from astrolabe.constructs.coordinate import Coordinate
from astrolabe.utils.crs import LATLON_CRS
from astrolabe.utils.exceptions import InvalidInput
from astrolabe.utils.keys import (
    ALT_COMMUNITY_COLUMN,
    DEFAULT_ALT_COLUMN,
    DEFAULT_LAT_COLUMN,
    DEFAULT_LON_COLUMN,
    LAT_COMMUNITY_COLUMN,
    LON_COMMUNITY_COLUMN,
)
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

log = logging.getLogger(__name__)


def _round_half_away(values: np.ndarray) -> np.ndarray:
    """Array version of astrolabe.codec.scalar.round_half_away."""
    magnitude = np.abs(values)
    whole = np.floor(magnitude)
    whole = whole + (magnitude - whole >= 0.5)
    return np.where(values < 0, -whole, whole).astype(np.int64)


def _finite_column(values: pd.Series, name: str) -> np.ndarray:
    if pd.api.types.is_bool_dtype(values):
        raise InvalidInput(f"{name} values must be real numbers, not booleans")
    if pd.api.types.is_object_dtype(values):
        # mixed python objects go through the scalar check, so huge ints saturate
        return np.array([finite_value(v, name) for v in values], dtype=float)
    try:
        array = values.to_numpy(dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"{name} values must be real numbers") from e
    bad = ~np.isfinite(array)
    if bad.any():
        raise InvalidInput(
            f"{name} must be finite but found {array[bad]} at {list(values.index[bad])}"
        )
    return array


def _encode_angles(
    values: np.ndarray, low: float, high: float, scale: int, base: int
) -> np.ndarray:
    angles = np.clip(values, low, high)
    return base + _round_half_away((angles - low) * scale / (high - low))


class SiteTable:
    """
    A table of located sites (routers, points of presence, data centers...) that can
    be encoded to, or rebuilt from, community codes in bulk.

    A SiteTable wraps a GeoDataFrame of WGS84 point geometries plus an altitude column
    in meters. Frames in another CRS are reprojected on construction. The index
    identifies each site and must be unique.

    Attributes:
        coords: A list of Coordinate objects, one per site
        crs: The coordinate reference system of the table (always WGS84)
        index: The pandas Index from the underlying GeoDataFrame

    Examples:
        >>> import pandas as pd
        >>> from astrolabe.constructs.sites import SiteTable
        >>>
        >>> df = pd.DataFrame({
        ...     'latitude': [37.7749, 51.5074],
        ...     'longitude': [-122.4194, -0.1278],
        ...     'altitude': [15, 35],
        ... }, index=['sfo', 'lon'])
        >>> sites = SiteTable.from_dataframe(df)
        >>> sites.encode().loc['sfo'].to_list()
        [623818967, 910733802, 690000015]
    """

    _frame: GeoDataFrame

    def __init__(self, frame: GeoDataFrame, alt_column: str = DEFAULT_ALT_COLUMN):
        if frame.index.has_duplicates:
            duplicates = frame.index[frame.index.duplicated()].values
            raise IndexError(
                f"SiteTable cannot have duplicates in the index but found {duplicates}"
            )
        if frame.crs is None:
            raise TypeError("the site frame has no crs; set one before building a table")

        if alt_column in frame.columns:
            altitude = frame[alt_column]
            # bool and object columns are left as given and checked by encode()
            numeric = pd.api.types.is_numeric_dtype(altitude)
            if numeric and not pd.api.types.is_bool_dtype(altitude):
                altitude = altitude.astype(float)
        else:
            altitude = pd.Series(0.0, index=frame.index)

        frame = GeoDataFrame(
            {DEFAULT_ALT_COLUMN: altitude}, geometry=frame.geometry, index=frame.index
        )
        if not frame.crs.equals(LATLON_CRS):
            frame = frame.to_crs(LATLON_CRS)
        self._frame = frame

    def __getitem__(self, i) -> SiteTable:
        if isinstance(i, int):
            i = [i]
        new_frame = self._frame.iloc[i]
        return SiteTable(new_frame)

    def __len__(self):
        """Number of sites."""
        return len(self._frame)

    def __str__(self):
        output_lines = [
            "Astrolabe SiteTable object",
            f"frame: {self._frame}",
        ]
        return "\n".join(output_lines)

    def __repr__(self):
        return self.__str__()

    @property
    def index(self) -> pd.Index:
        """Get index to underlying GeoDataFrame."""
        return self._frame.index

    @property
    def crs(self) -> CRS:
        return self._frame.crs

    @cached_property
    def coords(self) -> List[Coordinate]:
        return [
            Coordinate(i, g, self.crs, float(alt))
            for i, g, alt in zip(
                self._frame.index,
                self._frame.geometry,
                self._frame[DEFAULT_ALT_COLUMN],
            )
        ]

    @classmethod
    def from_geo_dataframe(
        cls, frame: GeoDataFrame, alt_column: str = DEFAULT_ALT_COLUMN
    ) -> SiteTable:
        """
        Create a site table from a GeoDataFrame of Point geometries.

        Only the geometry, the index and the altitude column are kept.

        Args:
            frame: A GeoDataFrame with Point geometries, a CRS and unique index values
            alt_column: The name of the altitude column, in meters. Sites get an altitude
                of 0.0 when the column is absent. Default is "altitude".

        Returns:
            A new SiteTable in WGS84
        """
        return SiteTable(frame, alt_column)

    @classmethod
    def from_dataframe(
        cls,
        dataframe: pd.DataFrame,
        lat_column: str = DEFAULT_LAT_COLUMN,
        lon_column: str = DEFAULT_LON_COLUMN,
        alt_column: str = DEFAULT_ALT_COLUMN,
    ) -> SiteTable:
        """
        Create a site table from a pandas DataFrame with WGS84 latitude/longitude columns.

        Args:
            dataframe: A DataFrame holding EPSG:4326 coordinates
            lat_column: The name of the latitude column. Default is "latitude".
            lon_column: The name of the longitude column. Default is "longitude".
            alt_column: The name of the optional altitude column. Default is "altitude".

        Returns:
            A new SiteTable
        """
        data = {}
        if alt_column in dataframe.columns:
            data[DEFAULT_ALT_COLUMN] = dataframe[alt_column]
        frame = GeoDataFrame(
            data,
            geometry=points_from_xy(dataframe[lon_column], dataframe[lat_column]),
            index=dataframe.index,
            crs=LATLON_CRS,
        )
        return SiteTable(frame)

    @classmethod
    def from_csv(
        cls,
        file: Union[str, Path],
        lat_column: str = DEFAULT_LAT_COLUMN,
        lon_column: str = DEFAULT_LON_COLUMN,
        alt_column: str = DEFAULT_ALT_COLUMN,
        index_column: Optional[str] = None,
    ) -> SiteTable:
        """
        Create a site table from a CSV file of WGS84 coordinates.

        Args:
            file: Path to the CSV file
            lat_column: The name of the latitude column. Default is "latitude".
            lon_column: The name of the longitude column. Default is "longitude".
            alt_column: The name of the optional altitude column. Default is "altitude".
            index_column: A column to use as the site identifier. Default is the row number.

        Returns:
            A new SiteTable

        Raises:
            FileNotFoundError: If the file does not exist
            TypeError: If the file does not have a .csv extension
            ValueError: If the latitude/longitude columns are not in the file
        """
        filepath = Path(file)
        if not filepath.is_file():
            raise FileNotFoundError(file)
        elif not filepath.suffix == ".csv":
            raise TypeError(
                f"file of type {filepath.suffix} does not appear to be a csv file"
            )

        columns = pd.read_csv(filepath, nrows=0).columns.to_list()
        if lat_column not in columns or lon_column not in columns:
            raise ValueError(
                "Could not find any geometry information in the file; "
                "Make sure there are latitude and longitude columns "
                "[and provide the lat/lon column names to this function]"
            )

        df = pd.read_csv(filepath, index_col=index_column)
        log.info("loaded %d sites from %s", len(df), filepath)
        return SiteTable.from_dataframe(df, lat_column, lon_column, alt_column)

    @classmethod
    def from_geojson(
        cls,
        file: Union[str, Path],
        index_property: Optional[str] = None,
        alt_column: str = DEFAULT_ALT_COLUMN,
    ) -> SiteTable:
        """
        Create a site table from a GeoJSON file of Point features.

        Args:
            file: Path to the GeoJSON file
            index_property: A feature property to use as the site identifier. Default
                is the feature order.
            alt_column: The feature property holding the altitude. Default is "altitude".

        Returns:
            A new SiteTable
        """
        filepath = Path(file)
        frame = read_file(filepath)
        if index_property and index_property in frame.columns:
            frame = frame.set_index(index_property)
        log.info("loaded %d sites from %s", len(frame), filepath)
        return SiteTable(frame, alt_column)

    @classmethod
    def from_communities(
        cls,
        dataframe: pd.DataFrame,
        lat_column: str = LAT_COMMUNITY_COLUMN,
        lon_column: str = LON_COMMUNITY_COLUMN,
        alt_column: str = ALT_COMMUNITY_COLUMN,
    ) -> SiteTable:
        """
        Rebuild a site table from columns of community codes.

        Every value goes through the classifier, so malformed or out-of-range codes
        are rejected, and each column must hold codes of the kind it is named for.

        Args:
            dataframe: A DataFrame of community codes (integers or 9-digit strings)
            lat_column: The latitude code column. Default is "latitude_community".
            lon_column: The longitude code column. Default is "longitude_community".
            alt_column: The optional altitude code column. Default is "altitude_community".

        Returns:
            A new SiteTable with decoded coordinates

        Raises:
            MalformedCode: If a value is not a 9-digit integer
            UnclassifiableCode: If a value lies outside the three ranges
            ValueError: If a column holds a code of the wrong kind
        """

        def _decode_column(column: str, kind: CoordinateKind) -> List[float]:
            values = []
            for i, code in dataframe[column].items():
                decoded = decode_community(code)
                if decoded.kind is not kind:
                    raise ValueError(
                        f"expected a {kind.value} community in column {column} "
                        f"at {i} but found a {decoded.kind.value} community"
                    )
                values.append(decoded.value)
            return values

        data = {
            DEFAULT_LAT_COLUMN: _decode_column(lat_column, CoordinateKind.LATITUDE),
            DEFAULT_LON_COLUMN: _decode_column(lon_column, CoordinateKind.LONGITUDE),
        }
        if alt_column in dataframe.columns:
            data[DEFAULT_ALT_COLUMN] = _decode_column(
                alt_column, CoordinateKind.ALTITUDE
            )

        return SiteTable.from_dataframe(pd.DataFrame(data, index=dataframe.index))

    def encode(self) -> pd.DataFrame:
        """
        Encode every site as its three community codes.

        The result matches applying encode_latitude, encode_longitude and
        encode_altitude to each site in turn.

        Returns:
            A DataFrame with the table's index and the integer columns
            latitude_community, longitude_community and altitude_community

        Raises:
            InvalidInput: If any coordinate or altitude is NaN or infinite
        """
        lat = _finite_column(self._frame.geometry.y, "latitude")
        lon = _finite_column(self._frame.geometry.x, "longitude")
        alt = _finite_column(self._frame[DEFAULT_ALT_COLUMN], "altitude")

        return pd.DataFrame(
            {
                LAT_COMMUNITY_COLUMN: _encode_angles(
                    lat, LAT_MIN, LAT_MAX, LAT_SCALE, LAT_BASE
                ),
                LON_COMMUNITY_COLUMN: _encode_angles(
                    lon, LON_MIN, LON_MAX, LON_SCALE, LON_BASE
                ),
                ALT_COMMUNITY_COLUMN: ALT_BASE
                + _round_half_away(np.clip(alt, -ALT_MAX, ALT_MAX)),
            },
            index=self._frame.index,
        )

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert the table to a DataFrame of coordinates and their community codes.

        Returns:
            A DataFrame with latitude, longitude and altitude columns followed by the
            three community columns
        """
        coordinates = pd.DataFrame(
            {
                DEFAULT_LAT_COLUMN: self._frame.geometry.y,
                DEFAULT_LON_COLUMN: self._frame.geometry.x,
                DEFAULT_ALT_COLUMN: self._frame[DEFAULT_ALT_COLUMN],
            },
            index=self._frame.index,
        )
        return pd.concat([coordinates, self.encode()], axis=1)

    def to_csv(self, file: Union[str, Path]):
        """
        Write the sites and their community codes to a CSV file.

        Args:
            file: Path where the CSV file should be written
        """
        self.to_dataframe().to_csv(file)

    def to_geojson(self, file: Union[str, Path]):
        """
        Write the sites to a GeoJSON file with their community codes as properties.

        Args:
            file: Path where the GeoJSON file should be written
        """
        frame = GeoDataFrame(self.encode(), geometry=self._frame.geometry)
        frame[DEFAULT_ALT_COLUMN] = self._frame[DEFAULT_ALT_COLUMN]
        frame.to_file(file, driver="GeoJSON")
