"""Default column names used when reading and writing site tables.

Site tables read coordinates from the input columns and write the encoded
communities to the output columns.
"""

# Input columns holding WGS84 coordinates and altitude in meters
DEFAULT_LAT_COLUMN = "latitude"
DEFAULT_LON_COLUMN = "longitude"
DEFAULT_ALT_COLUMN = "altitude"

# Output columns holding the encoded community codes
LAT_COMMUNITY_COLUMN = "latitude_community"
LON_COMMUNITY_COLUMN = "longitude_community"
ALT_COMMUNITY_COLUMN = "altitude_community"
