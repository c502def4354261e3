"""Tests for agent-centric position normalization."""

from types import SimpleNamespace

import pytest

from spatial import NormalizationMode, normalize_positions, normalized_positions, to_facing_frame
from spatial.normalization import normalize_components, normalize_value


class TestNormalizationModes:
    """Test each normalization mode on matching dimensions."""

    def test_none_leaves_positions_untouched(self):
        """NONE keeps every element, including its identity."""
        positions = [(1.5, -2.0), (0.1, 0.2, 0.3)]
        originals = list(positions)
        normalize_positions((100.0, 100.0), 10.0, positions, NormalizationMode.NONE)
        assert all(a is b for a, b in zip(positions, originals))

    def test_local_2d(self):
        """LOCAL subtracts the origin."""
        positions = [(3.0, 4.0), (-1.0, 0.0)]
        normalize_positions((1.0, 1.0), 10.0, positions, NormalizationMode.LOCAL)
        assert positions == [(2.0, 3.0), (-2.0, -1.0)]

    def test_local_3d(self):
        """LOCAL subtracts every axis for 3D against 3D."""
        positions = [(3.0, 4.0, 5.0)]
        normalize_positions((1.0, 1.0, 1.0), 10.0, positions)
        assert positions == [(2.0, 3.0, 4.0)]

    def test_local_with_zero_origin_is_identity(self):
        """A zero origin leaves values unchanged."""
        positions = [(3.0, 4.0), (1.0, 2.0, 3.0)]
        normalize_positions((0.0, 0.0, 0.0), 5.0, positions, NormalizationMode.LOCAL)
        assert positions == [(3.0, 4.0), (1.0, 2.0, 3.0)]
        positions = [(3.0, 4.0), (1.0, 2.0, 3.0)]
        normalize_positions((0.0, 0.0), 5.0, positions, NormalizationMode.LOCAL)
        assert positions == [(3.0, 4.0), (1.0, 2.0, 3.0)]

    def test_normalized_scales_and_clamps(self):
        """NORMALIZED divides by distance and clamps into [-1, 1]."""
        positions = [(5.0, -5.0), (50.0, -50.0)]
        normalize_positions((0.0, 0.0), 10.0, positions, NormalizationMode.NORMALIZED)
        assert positions == [(0.5, -0.5), (1.0, -1.0)]

    def test_normalized_3d(self):
        """NORMALIZED handles all three axes."""
        positions = [(2.0, 4.0, 30.0)]
        normalize_positions((1.0, 2.0, 3.0), 4.0, positions, NormalizationMode.NORMALIZED)
        assert positions == [pytest.approx((0.25, 0.5, 1.0))]

    def test_default_mode_is_local(self):
        """The default mode only re-centers."""
        positions = [(20.0, 0.0)]
        normalize_positions((10.0, 0.0), 1.0, positions)
        assert positions == [(10.0, 0.0)]


class TestMixedDimensions:
    """Test 2D origins against 3D positions and the reverse."""

    def test_2d_origin_local_keeps_height(self):
        """Height passes through unchanged."""
        positions = [(5.0, 7.0, 9.0)]
        normalize_positions((1.0, 2.0), 10.0, positions, NormalizationMode.LOCAL)
        assert positions == [(4.0, 7.0, 7.0)]

    def test_2d_origin_normalized_scales_height(self):
        """Height is scaled by the same divisor without shifting."""
        positions = [(5.0, 7.0, 9.0)]
        normalize_positions((1.0, 2.0), 10.0, positions, NormalizationMode.NORMALIZED)
        assert positions == [pytest.approx((0.4, 0.7, 0.7))]

    def test_3d_origin_against_2d_positions(self):
        """2D positions shift by the origin's x and z."""
        positions = [(5.0, 9.0)]
        normalize_positions((1.0, 100.0, 2.0), 10.0, positions, NormalizationMode.LOCAL)
        assert positions == [(4.0, 7.0)]
        positions = [(5.0, 9.0)]
        normalize_positions((1.0, 100.0, 2.0), 2.0, positions, NormalizationMode.NORMALIZED)
        assert positions == [(1.0, 1.0)]

    def test_origin_position_source(self):
        """The origin may be a handle."""
        origin = SimpleNamespace(position=(1.0, 0.0, 1.0))
        positions = [(2.0, 2.0)]
        normalize_positions(origin, 1.0, positions)
        assert positions == [(1.0, 1.0)]


class TestHelpers:
    """Test scalar helpers and the copying variant."""

    def test_normalize_value(self):
        """Values divide then clamp."""
        assert normalize_value(5.0, 10.0) == 0.5
        assert normalize_value(-50.0, 10.0) == -1.0
        assert normalize_value(5.0, 1.0, 0.0, 2.0) == 2.0

    def test_normalize_components(self):
        """Every component is normalized."""
        assert normalize_components((1.0, -20.0, 4.0), 4.0) == (0.25, -1.0, 1.0)

    def test_normalized_positions_copies(self):
        """The copying variant leaves its input alone."""
        positions = [(3.0, 4.0)]
        result = normalized_positions((1.0, 1.0), 1.0, positions)
        assert result == [(2.0, 3.0)]
        assert positions == [(3.0, 4.0)]


class TestFacingFrame:
    """Test positions relative to an observer's facing."""

    def test_facing_forward_axis(self):
        """Facing +z, right is +x and ahead is +z."""
        result = to_facing_frame((3.0, 5.0), (1.0, 1.0), (0.0, 1.0), 10.0)
        assert result == pytest.approx((0.2, 0.4))

    def test_forward_length_does_not_matter(self):
        """Forward is normalized before use."""
        assert to_facing_frame((3.0, 5.0), (1.0, 1.0), (0.0, 5.0), 10.0) == pytest.approx((0.2, 0.4))

    def test_turned_observer(self):
        """Facing +x, a point on +z lies to the left."""
        assert to_facing_frame((0.0, 3.0), (0.0, 0.0), (1.0, 0.0), 10.0) == pytest.approx((-0.3, 0.0))

    def test_components_are_clamped(self):
        """Offsets beyond the reference distance clamp to one."""
        assert to_facing_frame((50.0, -50.0), (0.0, 0.0), (0.0, 1.0), 10.0) == pytest.approx((1.0, -1.0))

    def test_3d_keeps_height(self):
        """A 3D observer reports the height offset in the middle."""
        result = to_facing_frame((2.0, 3.0, 4.0), (0.0, 0.0, 0.0), (0.0, 0.0, 2.0), 10.0)
        assert result == pytest.approx((0.2, 0.3, 0.4))

    def test_3d_value_with_2d_observer(self):
        """Without observer height the result sits at height zero."""
        result = to_facing_frame((2.0, 3.0, 4.0), (0.0, 0.0), (0.0, 1.0), 10.0)
        assert result == pytest.approx((0.2, 0.0, 0.4))

    def test_2d_value_with_3d_observer(self):
        """A 2D value stays 2D."""
        result = to_facing_frame((2.0, 4.0), (0.0, 7.0, 0.0), (0.0, 0.0, 1.0), 10.0)
        assert result == pytest.approx((0.2, 0.4))

    def test_handles(self):
        """Observer and value accept position sources."""
        observer = SimpleNamespace(position=(1.0, 0.0, 1.0))
        result = to_facing_frame(SimpleNamespace(position=(1.0, 0.0, 6.0)), observer, (0.0, 0.0, 1.0), 10.0)
        assert result == pytest.approx((0.0, 0.0, 0.5))
