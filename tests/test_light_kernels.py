"""Unit tests for the kernel-side point light table.

Tests cover:
- Registration, counting and clearing
- Capacity limits
- Batched incident illumination against the host-side light
- Light functions called from within Taichi kernels
"""

import math

import numpy as np
import pytest
import taichi as ti

from radiant.core.interaction import InteractionCommon
from radiant.core.sampling import uniform_sample_sphere
from radiant.core.transform import identity, translate
from radiant.lights.point import PointLight


class TestPointLightTable:
    """Tests for point light registration."""

    def test_add_and_count(self):
        """Test lights get consecutive indices."""
        from radiant.lights.kernels import add_point_light, get_point_light_count

        assert get_point_light_count() == 0
        assert add_point_light(PointLight(identity(), None, 1.0)) == 0
        assert add_point_light(PointLight(translate((0.0, 1.0, 0.0)), None, 2.0)) == 1
        assert get_point_light_count() == 2

    def test_stored_values(self):
        """Test position and intensity are copied into the fields."""
        from radiant.lights.kernels import (
            add_point_light,
            point_light_intensities,
            point_light_positions,
        )

        idx = add_point_light(PointLight(translate((1.0, 2.0, 3.0)), None, (4.0, 5.0, 6.0)))
        np.testing.assert_allclose(point_light_positions[idx].to_numpy(), [1.0, 2.0, 3.0])
        np.testing.assert_allclose(point_light_intensities[idx].to_numpy(), [4.0, 5.0, 6.0])

    def test_clear(self):
        """Test clearing resets the table."""
        from radiant.lights.kernels import add_point_light, clear_point_lights, get_point_light_count

        add_point_light(PointLight(identity(), None, 1.0))
        clear_point_lights()
        assert get_point_light_count() == 0
        assert add_point_light(PointLight(identity(), None, 1.0)) == 0

    def test_overflow(self):
        """Test exceeding the table capacity raises."""
        from radiant.lights.kernels import MAX_POINT_LIGHTS, add_point_light, num_point_lights

        num_point_lights[None] = MAX_POINT_LIGHTS
        with pytest.raises(RuntimeError, match="Maximum number of point lights"):
            add_point_light(PointLight(identity(), None, 1.0))


class TestSampleLiPoints:
    """Tests for batched incident illumination."""

    def test_matches_host(self):
        """Test the kernel agrees with PointLight.sample_li."""
        from radiant.lights.kernels import add_point_light, sample_li_points

        light = PointLight(translate((0.5, 3.0, -1.0)), None, (2.0, 4.0, 8.0))
        idx = add_point_light(light)
        points = np.array(
            [[0.0, 0.0, 0.0], [1.0, 1.0, 1.0], [-2.0, 0.5, 3.0], [0.5, 2.0, -1.0]],
            dtype=np.float64,
        )
        wi, pdf, li = sample_li_points(idx, points)
        assert wi.shape == (4, 3)
        assert pdf.shape == (4,)
        assert li.shape == (4, 3)
        for k, p in enumerate(points):
            expected = light.sample_li(InteractionCommon(p=p), (0.5, 0.5))
            np.testing.assert_allclose(wi[k], expected.wi, rtol=1e-5, atol=1e-6)
            assert pdf[k] == expected.pdf
            np.testing.assert_allclose(li[k], expected.li, rtol=1e-5)

    def test_coincident_point(self):
        """Test a shading point at the light yields zero pdf and radiance."""
        from radiant.lights.kernels import add_point_light, sample_li_points

        idx = add_point_light(PointLight(translate((1.0, 2.0, 3.0)), None, 1.0))
        wi, pdf, li = sample_li_points(idx, [[1.0, 2.0, 3.0]])
        assert pdf[0] == 0.0
        np.testing.assert_array_equal(wi[0], [0.0, 0.0, 0.0])
        np.testing.assert_array_equal(li[0], [0.0, 0.0, 0.0])

    def test_empty_batch(self):
        """Test an empty batch returns empty arrays."""
        from radiant.lights.kernels import add_point_light, sample_li_points

        idx = add_point_light(PointLight(identity(), None, 1.0))
        wi, pdf, li = sample_li_points(idx, np.zeros((0, 3)))
        assert wi.shape == (0, 3)
        assert pdf.shape == (0,)
        assert li.shape == (0, 3)

    def test_invalid_index(self):
        """Test unregistered indices are rejected."""
        from radiant.lights.kernels import add_point_light, sample_li_points

        with pytest.raises(ValueError, match="Invalid point light index"):
            sample_li_points(0, [[0.0, 0.0, 0.0]])
        add_point_light(PointLight(identity(), None, 1.0))
        with pytest.raises(ValueError):
            sample_li_points(1, [[0.0, 0.0, 0.0]])

    def test_invalid_shape(self):
        """Test points must have shape (n, 3)."""
        from radiant.lights.kernels import add_point_light, sample_li_points

        idx = add_point_light(PointLight(identity(), None, 1.0))
        with pytest.raises(ValueError, match="shape"):
            sample_li_points(idx, [0.0, 0.0, 1.0])


class TestKernelFunctions:
    """Tests for the ti.func light functions inside kernels."""

    def test_point_light_power(self):
        """Test the kernel-side power is 4 pi I."""
        from radiant.lights.kernels import add_point_light, point_light_power

        idx = add_point_light(PointLight(identity(), None, (1.0, 2.0, 3.0)))
        out = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel(light_index: ti.i32):
            out[None] = point_light_power(light_index)

        test_kernel(idx)
        np.testing.assert_allclose(out[None].to_numpy(), 4.0 * math.pi * np.array([1.0, 2.0, 3.0]), rtol=1e-5)

    def test_sample_point_light_le(self):
        """Test kernel-side emission sampling agrees with the host light."""
        from radiant.lights.kernels import add_point_light, sample_point_light_le

        light = PointLight(translate((0.0, 5.0, 1.0)), None, 3.0)
        idx = add_point_light(light)
        origin = ti.Vector.field(3, dtype=ti.f32, shape=())
        direction = ti.Vector.field(3, dtype=ti.f32, shape=())
        pdfs = ti.field(dtype=ti.f32, shape=2)
        le = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel(light_index: ti.i32, u0: ti.f32, u1: ti.f32):
            o, d, pdf_pos, pdf_dir, emitted = sample_point_light_le(light_index, ti.math.vec2(u0, u1))
            origin[None] = o
            direction[None] = d
            pdfs[0] = pdf_pos
            pdfs[1] = pdf_dir
            le[None] = emitted

        test_kernel(idx, 0.3, 0.7)
        np.testing.assert_allclose(origin[None].to_numpy(), [0.0, 5.0, 1.0])
        np.testing.assert_allclose(direction[None].to_numpy(), uniform_sample_sphere((0.3, 0.7)), atol=1e-5)
        assert pdfs[0] == 1.0
        assert pdfs[1] == pytest.approx(1.0 / (4.0 * math.pi), rel=1e-5)
        np.testing.assert_allclose(le[None].to_numpy(), [3.0, 3.0, 3.0])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
