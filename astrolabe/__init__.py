from pathlib import Path

from astrolabe.codec.classifier import classify_community, decode_community, parse_code
from astrolabe.codec.position import decode_communities, encode_coordinate
from astrolabe.codec.scalar import (
    decode_altitude,
    decode_latitude,
    decode_longitude,
    encode_altitude,
    encode_latitude,
    encode_longitude,
)

__version__ = "0.1.0"


def package_root() -> Path:
    return Path(__file__).parent
