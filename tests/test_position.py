from unittest import TestCase

from astrolabe.codec.position import decode_communities, encode_coordinate
from astrolabe.constructs.community import CommunitySet
from astrolabe.constructs.coordinate import Coordinate
from astrolabe.utils.crs import LATLON_CRS, XY_CRS
from astrolabe.utils.exceptions import InvalidInput, MalformedCode, UnclassifiableCode


class TestEncodeCoordinate(TestCase):
    def test_encode_lat_lon_alt(self):
        coord = Coordinate.from_lat_lon(37.7749, -122.4194, altitude=15)
        self.assertEqual(
            encode_coordinate(coord), CommunitySet(623818967, 910733802, 690000015)
        )

    def test_encode_without_altitude_uses_sea_level(self):
        communities = encode_coordinate(Coordinate.from_lat_lon(40.7128, -74.0060))
        self.assertEqual(communities.altitude, 690000000)

    def test_projected_coordinates_are_reprojected_first(self):
        coord = Coordinate.from_lat_lon(40.7128, -74.0060, altitude=10)
        self.assertEqual(
            encode_coordinate(coord.to_crs(XY_CRS)),
            CommunitySet(624366631, 919758713, 690000010),
        )

    def test_non_finite_altitude_is_rejected(self):
        coord = Coordinate.from_lat_lon(0.0, 0.0, altitude=float("nan"))
        with self.assertRaises(InvalidInput):
            encode_coordinate(coord)


class TestDecodeCommunities(TestCase):
    def test_round_trip(self):
        coord = Coordinate.from_lat_lon(51.5074, -0.1278, altitude=35)
        decoded = decode_communities(encode_coordinate(coord).to_list(), "lhr")

        self.assertEqual(decoded.coordinate_id, "lhr")
        self.assertEqual(decoded.crs, LATLON_CRS)
        self.assertAlmostEqual(decoded.latitude, 51.5074, places=5)
        self.assertAlmostEqual(decoded.longitude, -0.1278, places=5)
        self.assertEqual(decoded.altitude, 35.0)

    def test_order_does_not_matter(self):
        a = decode_communities([623818967, 910733802, 690000015])
        b = decode_communities(["690000015", "910733802", "623818967"])
        self.assertEqual((a.x, a.y, a.altitude), (b.x, b.y, b.altitude))

    def test_altitude_is_optional(self):
        coord = decode_communities([910733802, 623818967])
        self.assertEqual(coord.altitude, 0.0)

    def test_missing_longitude(self):
        with self.assertRaisesRegex(ValueError, "missing longitude"):
            decode_communities([623818967, 690000015])

    def test_missing_latitude_and_longitude(self):
        with self.assertRaisesRegex(ValueError, "missing latitude and longitude"):
            decode_communities([690000015])

    def test_repeated_kind(self):
        with self.assertRaisesRegex(ValueError, "more than one latitude"):
            decode_communities([623818967, 600000000, 910733802])

    def test_classification_errors_propagate(self):
        with self.assertRaises(UnclassifiableCode):
            decode_communities([623818967, 650000000])
        with self.assertRaises(MalformedCode):
            decode_communities([623818967, "9107338"])
