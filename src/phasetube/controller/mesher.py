"""
Procedural Mesh Generation
==========================
This module turns centerlines into triangle meshes for the renderer.

Why is this file needed?
------------------------
1. Extrusion: The trajectory is a polyline; the renderer needs a surface. Each
   segment is swept into an open cylinder (a "tube segment").
2. Primitives: Axis arrows and grid lines reuse the same construction as
   standalone cylinders and cones.

All builders are stateless and return a fresh Mesh. Partial meshes can be
merged with Mesh.concatenate.
"""
from __future__ import annotations

import logging
from typing import Tuple

import numpy as np
import numpy.typing as npt

from phasetube.model.geometry_primitives import Mesh, PointLike, as_xyz

logger = logging.getLogger(__name__)

# When the tangent is nearly parallel to +Y, the cross product with +Y is
# ill-conditioned; switch the reference vector to +X above this |d.y|.
FRAME_UP_THRESHOLD: float = 0.9

# Segments shorter than this are skipped instead of being normalized.
DEGENERATE_LENGTH: float = 1e-9

TUBE_SEGMENTS: int = 8
PRIMITIVE_SEGMENTS: int = 12

_X_AXIS = np.array([1.0, 0.0, 0.0])
_Y_AXIS = np.array([0.0, 1.0, 0.0])


def orthonormal_frames(
    directions: npt.NDArray[np.float64]
) -> Tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Builds a perpendicular basis (u, v) around each unit direction.

    Args:
        directions: (N, 3) array of unit vectors.

    Returns:
        (u, v), both (N, 3); u = normalize(d x up), v = d x u.
    """
    d = np.asarray(directions, dtype=np.float64).reshape(-1, 3)
    use_x = np.abs(d[:, 1]) > FRAME_UP_THRESHOLD
    up = np.where(use_x[:, None], _X_AXIS, _Y_AXIS)

    u = np.cross(d, up)
    u /= np.linalg.norm(u, axis=1)[:, None]
    v = np.cross(d, u)
    return u, v


def ring_offsets(
    u: npt.NDArray[np.float64],
    v: npt.NDArray[np.float64],
    radius: float,
    segments: int,
) -> npt.NDArray[np.float64]:
    """
    Offsets of `segments` points on a circle of `radius` in each (u, v) plane.

    Returns:
        (N, segments, 3) array; angle k is 2*pi*k/segments.
    """
    angles = 2.0 * np.pi * np.arange(segments) / segments
    cos_a = np.cos(angles)[None, :, None]
    sin_a = np.sin(angles)[None, :, None]
    return radius * (cos_a * u[:, None, :] + sin_a * v[:, None, :])


def _unit_directions(
    starts: npt.NDArray[np.float64], ends: npt.NDArray[np.float64]
) -> Tuple[npt.NDArray[np.float64], npt.NDArray[np.bool_]]:
    """Normalized end - start, plus a mask of the non-degenerate rows."""
    diff = ends - starts
    length = np.linalg.norm(diff, axis=1)
    valid = length > DEGENERATE_LENGTH

    directions = np.zeros_like(diff)
    directions[valid] = diff[valid] / length[valid][:, None]
    return directions, valid


def _tube_face_template(segments: int) -> npt.NDArray[np.int64]:
    """
    Triangle indices of one tube segment, relative to its first vertex.
    Ring 0 occupies [0, segments), ring 1 occupies [segments, 2*segments).

    (u, v, d) is right-handed, so ring indices run counter-clockwise around
    the tangent and this ordering gives outward normals.
    """
    k = np.arange(segments, dtype=np.int64)
    nxt = (k + 1) % segments
    faces = np.stack([
        np.stack([k, nxt, segments + k], axis=1),
        np.stack([nxt, segments + nxt, segments + k], axis=1),
    ], axis=1)
    return faces.reshape(-1, 3)


def build_tube(
    points: npt.ArrayLike,
    radius: float,
    segments: int = TUBE_SEGMENTS,
) -> Mesh:
    """
    Sweeps a circular cross-section along a polyline.

    Every consecutive pair (p_i, p_i+1) gets its own two rings of `segments`
    vertices; neighbouring segments do not share vertices. Coincident pairs
    are skipped.

    Args:
        points: (N, 3) centerline, in order.
        radius: Tube radius.
        segments: Vertices per ring.

    Returns:
        Mesh with 2*segments vertices and 2*segments triangles per emitted
        segment, and `path_index` set to the centerline index of each vertex.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    if pts.shape[0] < 2:
        return Mesh.empty()

    starts, ends = pts[:-1], pts[1:]
    directions, valid = _unit_directions(starts, ends)

    n_skipped = int(np.count_nonzero(~valid))
    if n_skipped:
        logger.debug(f"Skipping {n_skipped} degenerate tube segment(s).")

    seg_ids = np.flatnonzero(valid)
    if seg_ids.size == 0:
        return Mesh.empty()

    u, v = orthonormal_frames(directions[seg_ids])
    offsets = ring_offsets(u, v, radius, segments)  # (S, seg, 3)

    rings = np.stack([
        starts[seg_ids][:, None, :] + offsets,
        ends[seg_ids][:, None, :] + offsets,
    ], axis=1)  # (S, 2, seg, 3)
    vertices = rings.reshape(-1, 3)

    n_seg = seg_ids.size
    verts_per_seg = 2 * segments
    base = (np.arange(n_seg, dtype=np.int64) * verts_per_seg)[:, None, None]
    triangles = (base + _tube_face_template(segments)[None, :, :]).reshape(-1, 3)

    ring_owner = np.stack([seg_ids, seg_ids + 1], axis=1).astype(np.int64)  # (S, 2)
    path_index = np.repeat(ring_owner.reshape(-1), segments)

    return Mesh(vertices=vertices, triangles=triangles, path_index=path_index)


def build_cylinder(
    p1: PointLike,
    p2: PointLike,
    radius: float,
    segments: int = PRIMITIVE_SEGMENTS,
) -> Mesh:
    """
    Open cylinder from p1 to p2.
    Vertices are interleaved: (p1 + off_k, p2 + off_k) for each k.
    """
    a, b = as_xyz(p1), as_xyz(p2)
    directions, valid = _unit_directions(a[None, :], b[None, :])
    if not valid[0]:
        logger.debug("Skipping degenerate cylinder.")
        return Mesh.empty()

    u, v = orthonormal_frames(directions)
    offsets = ring_offsets(u, v, radius, segments)[0]  # (seg, 3)

    vertices = np.stack([a + offsets, b + offsets], axis=1).reshape(-1, 3)

    k = np.arange(segments, dtype=np.int64)
    nxt = (k + 1) % segments
    i0, i1 = 2 * k, 2 * k + 1
    i2, i3 = 2 * nxt, 2 * nxt + 1
    triangles = np.stack([
        np.stack([i0, i2, i1], axis=1),
        np.stack([i1, i2, i3], axis=1),
    ], axis=1).reshape(-1, 3)

    return Mesh(vertices=vertices, triangles=triangles)


def build_cone(
    base: PointLike,
    tip: PointLike,
    radius: float,
    segments: int = PRIMITIVE_SEGMENTS,
) -> Mesh:
    """
    Cone mantle from a base circle to the apex.
    Vertex 0 is the apex, followed by the base ring; faces form a fan.
    """
    c, apex = as_xyz(base), as_xyz(tip)
    directions, valid = _unit_directions(c[None, :], apex[None, :])
    if not valid[0]:
        logger.debug("Skipping degenerate cone.")
        return Mesh.empty()

    u, v = orthonormal_frames(directions)
    offsets = ring_offsets(u, v, radius, segments)[0]

    vertices = np.vstack([apex[None, :], c + offsets])

    k = np.arange(segments, dtype=np.int64)
    triangles = np.stack([
        np.zeros(segments, dtype=np.int64),
        1 + k,
        1 + (k + 1) % segments,
    ], axis=1)

    return Mesh(vertices=vertices, triangles=triangles)
