"""
Test cases for exponential smoothing of the control point.
"""
import math
import random
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from hud_pointer.smoothing import ExponentialSmoother, DEFAULT_ALPHA


class TestExponentialSmoother(unittest.TestCase):
    """Test the smoother update rule."""

    def setUp(self):
        """Start every test from the screen centre."""
        self.smoother = ExponentialSmoother()

    def test_default_alpha(self):
        """Default smoothing factor is 0.15."""
        self.assertEqual(self.smoother.alpha, 0.15)
        self.assertEqual(DEFAULT_ALPHA, 0.15)

    def test_single_step(self):
        """One update moves alpha of the way on each axis independently."""
        x, y = self.smoother.update((1.0, -0.5))
        self.assertAlmostEqual(x, 0.15)
        self.assertAlmostEqual(y, -0.075)

    def test_position_starts_at_initial(self):
        smoother = ExponentialSmoother(alpha=0.5, initial=(0.2, -0.4))
        self.assertEqual(smoother.position, (0.2, -0.4))
        self.assertEqual(smoother.update((0.2, -0.4)), (0.2, -0.4))

    def test_no_overshoot(self):
        """Every update lands strictly between the previous position and the target."""
        rng = random.Random(1234)
        for _ in range(500):
            prev = self.smoother.position
            target = (rng.uniform(-1, 1), rng.uniform(-1, 1))
            new = self.smoother.update(target)
            for axis in range(2):
                lo, hi = sorted((prev[axis], target[axis]))
                self.assertLess(lo, new[axis])
                self.assertLess(new[axis], hi)

    def test_convergence_rate(self):
        """Reaches within epsilon of a constant target after log(eps)/log(1-alpha) ticks."""
        eps = 1e-3
        ticks = math.ceil(math.log(eps) / math.log(1 - DEFAULT_ALPHA))

        for _ in range(ticks - 1):
            self.smoother.update((1.0, 1.0))
        self.assertGreater(abs(1.0 - self.smoother.position[0]), eps)

        self.smoother.update((1.0, 1.0))
        self.assertLessEqual(abs(1.0 - self.smoother.position[0]), eps)
        self.assertLessEqual(abs(1.0 - self.smoother.position[1]), eps)

    def test_step_bound(self):
        """The per-tick change equals alpha times the remaining distance."""
        self.smoother.reset((0.4, 0.4))
        new = self.smoother.update((-0.6, 0.9))
        self.assertAlmostEqual(new[0] - 0.4, 0.15 * (-0.6 - 0.4))
        self.assertAlmostEqual(new[1] - 0.4, 0.15 * (0.9 - 0.4))

    def test_stays_in_range(self):
        """Bounded targets keep the position inside [-1, 1]."""
        for target in [(1.0, -1.0)] * 200 + [(-1.0, 1.0)] * 200:
            x, y = self.smoother.update(target)
            self.assertTrue(-1.0 <= x <= 1.0)
            self.assertTrue(-1.0 <= y <= 1.0)

    def test_invalid_alpha(self):
        """Alpha outside (0, 1] is rejected."""
        for alpha in (0.0, -0.1, 1.5):
            with self.assertRaises(ValueError):
                ExponentialSmoother(alpha=alpha)

    def test_reset(self):
        self.smoother.update((1.0, 1.0))
        self.smoother.reset()
        self.assertEqual(self.smoother.position, (0.0, 0.0))


if __name__ == '__main__':
    unittest.main()
