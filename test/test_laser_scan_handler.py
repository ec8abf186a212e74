"""
Unit tests for laser scan conversion and synthetic scans.
"""

from types import SimpleNamespace

import pytest
import numpy as np
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ransac_lines.geometry import POINT_DTYPE
from ransac_lines.laser_scan_handler import LaserScanHandler
from ransac_lines.synthetic import room_scan


class TestRawSample:
    """Tests for single reading conversion."""

    def test_polar_to_cartesian(self):
        point = LaserScanHandler.raw_sample_to_point(2.0, np.pi / 2)

        assert point.x == pytest.approx(0.0, abs=1e-6)
        assert point.y == pytest.approx(2.0, abs=1e-6)
        assert point.angle == pytest.approx(np.pi / 2, abs=1e-6)

    def test_negative_angle(self):
        point = LaserScanHandler.raw_sample_to_point(1.0, -np.pi)

        assert point.x == pytest.approx(-1.0, abs=1e-6)
        assert point.y == pytest.approx(0.0, abs=1e-6)


class TestPolarToPoints:
    """Tests for array conversion."""

    def test_filters_and_sorts(self):
        ranges = [1.0, np.inf, 0.05, 2.0, np.nan]
        angles = [0.5, 0.1, 0.2, -0.5, 0.3]

        points, valid_indices = LaserScanHandler.polar_to_points(
            ranges, angles, range_min=0.1, range_max=10.0
        )

        assert points.dtype == POINT_DTYPE
        assert list(valid_indices) == [3, 0]
        np.testing.assert_allclose(points['angle'], [-0.5, 0.5], atol=1e-6)
        np.testing.assert_allclose(points['x'], [2 * np.cos(-0.5), np.cos(0.5)], atol=1e-6)
        np.testing.assert_allclose(points['y'], [2 * np.sin(-0.5), np.sin(0.5)], atol=1e-6)

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            LaserScanHandler.polar_to_points([1.0, 2.0], [0.0])

    def test_empty(self):
        points, valid_indices = LaserScanHandler.polar_to_points([], [])

        assert len(points) == 0
        assert len(valid_indices) == 0


class TestLaserScanToPoints:
    """Tests for LaserScan-like message conversion."""

    def test_message_fields(self):
        msg = SimpleNamespace(
            ranges=[1.0, 1.0, 20.0, 1.0],
            angle_min=0.0,
            angle_max=np.pi / 2,
            range_min=0.1,
            range_max=10.0
        )

        points, valid_indices = LaserScanHandler.laserscan_to_points(msg)

        assert list(valid_indices) == [0, 1, 3]
        np.testing.assert_allclose(points['angle'], [0.0, np.pi / 6, np.pi / 2], atol=1e-6)

    def test_synthetic_room(self):
        scan = room_scan(rng=np.random.default_rng(42))

        points, _ = LaserScanHandler.laserscan_to_points(scan)

        assert len(scan.ranges) == 360
        assert len(points) == 360 - 18
        assert np.all(np.diff(points['angle']) > 0)
        radii = np.hypot(points['x'], points['y'])
        assert radii.min() >= 2.0 - 0.05
        assert radii.max() <= 5.0 + 0.05

    def test_synthetic_walls_as_lines(self):
        scan = room_scan(yaw=0.3)

        lines = scan.wall_lines()

        assert len(lines) == 4
        # Front wall cos(0.3) x + sin(0.3) y = 3
        assert lines[0].slope == pytest.approx(-np.cos(0.3) / np.sin(0.3))
        assert lines[0].intercept == pytest.approx(3.0 / np.sin(0.3))


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
