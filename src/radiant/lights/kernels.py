"""Kernel-side point lights.

Point lights registered here are mirrored into Taichi fields so integrators
written as Taichi kernels can evaluate them without leaving the kernel. The
host-side :class:`~radiant.lights.point.PointLight` stays the source of
truth; this module copies its position and intensity at registration.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from radiant.lights.kernels import add_point_light, sample_li_points
    >>> index = add_point_light(light)
    >>> wi, pdf, li = sample_li_points(index, shading_points)
    >>> # Or, within a Taichi kernel:
    >>> # wi, pdf, li = sample_point_light_li(index, ref_p)
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from radiant.core.sampling import sample_uniform_sphere
from radiant.lights.point import PointLight

# Type aliases for Taichi vectors
vec2 = tm.vec2
vec3 = tm.vec3

# Maximum number of point lights (preallocated to avoid kernel recompilation)
MAX_POINT_LIGHTS = 256

# Point light storage: Structure of Arrays layout
point_light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_POINT_LIGHTS)
point_light_intensities = ti.Vector.field(3, dtype=ti.f32, shape=MAX_POINT_LIGHTS)
num_point_lights = ti.field(dtype=ti.i32, shape=())


def clear_point_lights() -> None:
    """Remove all registered point lights.

    Only the count is reset; stale entries are overwritten by later
    registrations.
    """
    num_point_lights[None] = 0


def add_point_light(light: PointLight) -> int:
    """Register a point light for kernel-side evaluation.

    Args:
        light: The host-side light to mirror.

    Returns:
        The index of the light in the kernel-side table.

    Raises:
        RuntimeError: If the maximum number of point lights is exceeded.
    """
    idx = num_point_lights[None]
    if idx >= MAX_POINT_LIGHTS:
        raise RuntimeError(f"Maximum number of point lights ({MAX_POINT_LIGHTS}) exceeded")
    p = light.position
    i = light.intensity
    point_light_positions[idx] = [float(p[0]), float(p[1]), float(p[2])]
    point_light_intensities[idx] = [float(i[0]), float(i[1]), float(i[2])]
    num_point_lights[None] = idx + 1
    return idx


def get_point_light_count() -> int:
    """Get the number of registered point lights."""
    return int(num_point_lights[None])


@ti.func
def sample_point_light_li(light_index: ti.i32, ref_p: vec3):
    """Sample incident illumination from a registered point light.

    Args:
        light_index: Index returned by add_point_light.
        ref_p: The shading point.

    Returns:
        A tuple of (wi, pdf, li) where:
        - wi: Unit direction toward the light (zero if ref_p is the light).
        - pdf: 1.0, or 0.0 if ref_p coincides with the light.
        - li: Incident radiance I / r^2 (zero if ref_p is the light).
    """
    d = point_light_positions[light_index] - ref_p
    dist2 = tm.dot(d, d)
    wi = vec3(0.0, 0.0, 0.0)
    pdf = 0.0
    li = vec3(0.0, 0.0, 0.0)
    if dist2 > 0.0:
        wi = d / ti.sqrt(dist2)
        pdf = 1.0
        li = point_light_intensities[light_index] / dist2
    return wi, pdf, li


@ti.func
def point_light_power(light_index: ti.i32) -> vec3:
    """Total power emitted by a registered point light, 4 pi I."""
    return 4.0 * tm.pi * point_light_intensities[light_index]


@ti.func
def sample_point_light_le(light_index: ti.i32, u: vec2):
    """Sample a ray leaving a registered point light.

    Returns:
        A tuple of (origin, direction, pdf_pos, pdf_dir, le).
    """
    origin = point_light_positions[light_index]
    direction = sample_uniform_sphere(u)
    pdf_pos = 1.0
    pdf_dir = 1.0 / (4.0 * tm.pi)
    le = point_light_intensities[light_index]
    return origin, direction, pdf_pos, pdf_dir, le


@ti.kernel
def _sample_li_kernel(
    light_index: ti.i32,
    points: ti.types.ndarray(),
    wi_out: ti.types.ndarray(),
    pdf_out: ti.types.ndarray(),
    li_out: ti.types.ndarray(),
):
    for i in range(points.shape[0]):
        ref_p = vec3(points[i, 0], points[i, 1], points[i, 2])
        wi, pdf, li = sample_point_light_li(light_index, ref_p)
        for k in ti.static(range(3)):
            wi_out[i, k] = wi[k]
            li_out[i, k] = li[k]
        pdf_out[i] = pdf


def sample_li_points(
    light_index: int,
    points: npt.ArrayLike,
) -> tuple[npt.NDArray[np.float32], npt.NDArray[np.float32], npt.NDArray[np.float32]]:
    """Sample a registered point light at many shading points at once.

    Args:
        light_index: Index returned by add_point_light.
        points: Shading points, shape (n, 3).

    Returns:
        Tuple of (wi, pdf, li) arrays with shapes (n, 3), (n,), (n, 3).

    Raises:
        ValueError: If the index is not a registered light or points has
            the wrong shape.
    """
    if not 0 <= light_index < get_point_light_count():
        raise ValueError(f"Invalid point light index: {light_index}")
    pts = np.ascontiguousarray(points, dtype=np.float32)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError(f"Expected points of shape (n, 3), got {pts.shape}")
    n = pts.shape[0]
    wi = np.zeros((n, 3), dtype=np.float32)
    pdf = np.zeros(n, dtype=np.float32)
    li = np.zeros((n, 3), dtype=np.float32)
    if n > 0:
        _sample_li_kernel(light_index, pts, wi, pdf, li)
    return wi, pdf, li
