"""Coordinate Reference System (CRS) constants used by astrolabe.

Community codes are always computed from WGS84 latitude/longitude, so any point
held in another CRS is reprojected to LATLON_CRS before it is encoded.
"""

from pyproj import CRS

# WGS84 latitude/longitude (EPSG:4326), the only CRS codes are defined in
LATLON_CRS = CRS(4326)

# Web Mercator (EPSG:3857), a common projected CRS for site inventories
XY_CRS = CRS(3857)
