"""
Test cases for control-point extraction from hand landmarks.
"""
import math
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from hud_pointer.errors import MalformedLandmarksError
from hud_pointer.landmarks import control_point, to_pixels, HAND_CONNECTIONS, NUM_LANDMARKS
from tests.helpers import hand_at


class TestControlPoint(unittest.TestCase):
    """Test the palm-centre control point."""

    def test_centre_maps_to_origin(self):
        self.assertEqual(control_point(hand_at(0.5, 0.5)), (0.0, 0.0))

    def test_horizontal_axis_is_mirrored(self):
        """Left of the camera image is right on screen."""
        x, _ = control_point(hand_at(0.0, 0.5))
        self.assertEqual(x, 1.0)
        x, _ = control_point(hand_at(1.0, 0.5))
        self.assertEqual(x, -1.0)

    def test_vertical_axis_is_not_mirrored(self):
        _, y = control_point(hand_at(0.5, 0.0))
        self.assertEqual(y, -1.0)
        _, y = control_point(hand_at(0.5, 1.0))
        self.assertEqual(y, 1.0)

    def test_uses_palm_centre_only(self):
        """Fingertip positions do not move the control point."""
        landmarks = hand_at(0.25, 0.75)
        landmarks[8] = (0.99, 0.01)   # index tip
        landmarks[20] = (0.01, 0.99)  # pinky tip
        x, y = control_point(landmarks)
        self.assertAlmostEqual(x, 0.5)
        self.assertAlmostEqual(y, 0.5)

    def test_missing_palm_landmark(self):
        """Too few landmarks is malformed."""
        with self.assertRaises(MalformedLandmarksError):
            control_point([(0.5, 0.5)] * 9)

    def test_non_finite_coordinates(self):
        with self.assertRaises(MalformedLandmarksError):
            control_point(hand_at(math.nan, 0.5))
        with self.assertRaises(MalformedLandmarksError):
            control_point(hand_at(0.5, math.inf))

    def test_non_numeric_coordinates(self):
        landmarks = hand_at(0.5, 0.5)
        landmarks[9] = ("left", None)
        with self.assertRaises(MalformedLandmarksError):
            control_point(landmarks)

    def test_out_of_frame_palm_centre(self):
        """A palm centre outside the image is treated as malformed, not extrapolated."""
        for x, y in [(-0.3, 0.5), (0.5, 1.25), (1.0001, 0.5), (0.5, -0.01)]:
            with self.assertRaises(MalformedLandmarksError):
                control_point(hand_at(x, y))

    def test_frame_edges_are_in_range(self):
        self.assertEqual(control_point(hand_at(0.0, 0.0)), (1.0, -1.0))
        self.assertEqual(control_point(hand_at(1.0, 1.0)), (-1.0, 1.0))

    def test_malformed_is_value_error(self):
        with self.assertRaises(ValueError):
            control_point([])


class TestOverlayGeometry(unittest.TestCase):
    """Test helpers used to draw the hand."""

    def test_to_pixels(self):
        self.assertEqual(to_pixels((0.5, 0.25), (640, 480)), (320, 120))

    def test_connections_reference_valid_landmarks(self):
        for start, end in HAND_CONNECTIONS:
            self.assertTrue(0 <= start < NUM_LANDMARKS)
            self.assertTrue(0 <= end < NUM_LANDMARKS)


if __name__ == '__main__':
    unittest.main()
