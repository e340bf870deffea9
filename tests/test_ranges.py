from unittest import TestCase

from astrolabe.constructs.community import CoordinateKind
from astrolabe.utils.ranges import (
    ALT_BASE,
    ALT_MAX,
    ALTITUDE_RANGE,
    CLASSIFICATION_ORDER,
    CODE_MAX,
    CODE_MIN,
    LAT_BASE,
    LAT_SCALE,
    LATITUDE_RANGE,
    LON_BASE,
    LON_SCALE,
    LONGITUDE_RANGE,
)


class TestRangeTable(TestCase):
    def test_constants_match_deployed_scheme(self):
        self.assertEqual(LAT_SCALE, 33_554_431)
        self.assertEqual(LAT_BASE, 600_000_000)
        self.assertEqual(LON_SCALE, 67_108_863)
        self.assertEqual(LON_BASE, 900_000_000)
        self.assertEqual(ALT_BASE, 690_000_000)
        self.assertEqual(ALT_MAX, 8_388_607)

    def test_range_bounds(self):
        self.assertEqual(
            (LATITUDE_RANGE.low, LATITUDE_RANGE.high), (600_000_000, 633_554_431)
        )
        self.assertEqual(
            (ALTITUDE_RANGE.low, ALTITUDE_RANGE.high), (681_611_393, 698_388_607)
        )
        self.assertEqual(
            (LONGITUDE_RANGE.low, LONGITUDE_RANGE.high), (900_000_000, 967_108_863)
        )

    def test_range_sizes(self):
        self.assertEqual(LATITUDE_RANGE.size, 2**25)
        self.assertEqual(LONGITUDE_RANGE.size, 2**26)
        self.assertEqual(ALTITUDE_RANGE.size, 2 * ALT_MAX + 1)

    def test_ranges_are_nine_digit(self):
        for code_range in CLASSIFICATION_ORDER:
            self.assertGreaterEqual(code_range.low, CODE_MIN)
            self.assertLessEqual(code_range.high, CODE_MAX)
            self.assertEqual(len(str(code_range.low)), 9)
            self.assertEqual(len(str(code_range.high)), 9)

    def test_ranges_are_disjoint_at_every_edge(self):
        samples = []
        for code_range in CLASSIFICATION_ORDER:
            samples.extend(
                [
                    code_range.low - 1,
                    code_range.low,
                    code_range.high,
                    code_range.high + 1,
                ]
            )

        for code in samples:
            owners = [r.kind for r in CLASSIFICATION_ORDER if r.contains(code)]
            self.assertLessEqual(len(owners), 1, f"{code} is in {owners}")

    def test_edges_belong_to_their_own_range_only(self):
        for code_range in CLASSIFICATION_ORDER:
            self.assertTrue(code_range.contains(code_range.low))
            self.assertTrue(code_range.contains(code_range.high))
            self.assertFalse(code_range.contains(code_range.low - 1))
            self.assertFalse(code_range.contains(code_range.high + 1))

    def test_classification_order(self):
        self.assertEqual(
            [r.kind for r in CLASSIFICATION_ORDER],
            [CoordinateKind.LONGITUDE, CoordinateKind.ALTITUDE, CoordinateKind.LATITUDE],
        )
