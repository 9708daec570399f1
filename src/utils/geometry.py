"""Geometric operations for paths and polylines.

Provides:
    - Cubic Bézier adaptive flattening
    - Polyline operations: bbox, cumulative arc length
    - Point lookup at an arc-length distance along a polyline
    - Decimal rounding of coordinate tensors

Used by:
    - Geometry providers: Bézier → polyline, arc-length queries
    - Sampler / outliner: coordinate rounding to a fixed precision
    - SVG writer: viewBox from the sample bounding box
    - Tests: synthetic paths and validation

All tensors are float64 (N, 2) unless noted. Units are whatever the caller's
path uses (SVG user units in practice); nothing here converts units.
"""

from typing import Optional, Tuple

import torch


DTYPE = torch.float64


def as_points(points) -> torch.Tensor:
    """Convert a sequence of (x, y) pairs to a float64 tensor of shape (N, 2).

    Parameters
    ----------
    points : array-like or torch.Tensor
        Vertices as nested sequences or a tensor

    Returns
    -------
    torch.Tensor
        Shape (N, 2), dtype float64

    Raises
    ------
    ValueError
        If the data cannot be interpreted as (N, 2)
    """
    pts = torch.as_tensor(points, dtype=DTYPE)
    if pts.ndim == 1 and pts.numel() == 0:
        pts = pts.reshape(0, 2)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"Expected points of shape (N, 2), got {tuple(pts.shape)}")
    return pts


def bezier_cubic_polyline(
    p1: torch.Tensor,
    p2: torch.Tensor,
    p3: torch.Tensor,
    p4: torch.Tensor,
    max_err: float = 0.25,
    max_depth: int = 12
) -> torch.Tensor:
    """Flatten cubic Bézier to polyline via adaptive subdivision.

    Parameters
    ----------
    p1, p2, p3, p4 : torch.Tensor
        Control points, shape (2,)
    max_err : float
        Maximum allowed deviation from the curve, default 0.25
    max_depth : int
        Maximum recursion depth, default 12

    Returns
    -------
    torch.Tensor
        Polyline vertices, shape (N, 2), N ≥ 2

    Notes
    -----
    Stops when both inner control points lie within max_err of the chord
    or max_depth is reached. Endpoints are preserved exactly.
    """
    def subdivide(q1, q2, q3, q4, depth):
        if depth >= max_depth:
            return torch.stack([q1, q4], dim=0)

        # 2D cross product against the chord gives perpendicular distance
        chord = q4 - q1
        chord_len = torch.norm(chord) + 1e-12
        v2 = q2 - q1
        v3 = q3 - q1
        d2 = torch.abs(v2[0] * chord[1] - v2[1] * chord[0]) / chord_len
        d3 = torch.abs(v3[0] * chord[1] - v3[1] * chord[0]) / chord_len

        if max(d2.item(), d3.item()) <= max_err:
            return torch.stack([q1, q4], dim=0)

        # De Casteljau at t=0.5
        q12 = (q1 + q2) / 2.0
        q23 = (q2 + q3) / 2.0
        q34 = (q3 + q4) / 2.0
        q123 = (q12 + q23) / 2.0
        q234 = (q23 + q34) / 2.0
        q1234 = (q123 + q234) / 2.0

        left = subdivide(q1, q12, q123, q1234, depth + 1)
        right = subdivide(q1234, q234, q34, q4, depth + 1)

        # Shared midpoint appears once
        return torch.cat([left[:-1], right], dim=0)

    return subdivide(p1, p2, p3, p4, depth=0)


def polyline_bbox(points: torch.Tensor) -> Tuple[float, float, float, float]:
    """Compute axis-aligned bounding box of polyline.

    Returns
    -------
    Tuple[float, float, float, float]
        (xmin, ymin, xmax, ymax); points must be non-empty
    """
    xmin = points[:, 0].min().item()
    xmax = points[:, 0].max().item()
    ymin = points[:, 1].min().item()
    ymax = points[:, 1].max().item()

    return (xmin, ymin, xmax, ymax)


def cumulative_arclength(points: torch.Tensor) -> torch.Tensor:
    """Compute cumulative arc length at every vertex.

    Parameters
    ----------
    points : torch.Tensor
        Polyline vertices, shape (N, 2)

    Returns
    -------
    torch.Tensor
        Shape (N,), s[0] = 0.0 and s[-1] = total length
    """
    if points.shape[0] == 0:
        return torch.zeros(0, device=points.device, dtype=points.dtype)

    segment_lengths = torch.norm(points[1:] - points[:-1], dim=1)
    return torch.cat([
        torch.zeros(1, device=points.device, dtype=points.dtype),
        torch.cumsum(segment_lengths, dim=0)
    ])


def point_at_arclength(
    points: torch.Tensor,
    cumulative: torch.Tensor,
    distance: float
) -> torch.Tensor:
    """Locate the point at a given arc-length distance along a polyline.

    Parameters
    ----------
    points : torch.Tensor
        Polyline vertices, shape (N, 2), N ≥ 1
    cumulative : torch.Tensor
        Output of cumulative_arclength(points), shape (N,)
    distance : float
        Arc-length distance; clamped to [0, total length]

    Returns
    -------
    torch.Tensor
        Point, shape (2,)

    Notes
    -----
    Linear interpolation inside the edge that contains the distance.
    Zero-length edges are skipped by searchsorted (right side).
    """
    total = cumulative[-1].item()
    if points.shape[0] == 1 or total <= 0.0:
        return points[0].clone()

    d = min(max(float(distance), 0.0), total)
    if d >= total:
        return points[-1].clone()

    target = torch.tensor([d], dtype=cumulative.dtype, device=cumulative.device)
    hi = int(torch.searchsorted(cumulative, target, right=True).item())
    hi = min(max(hi, 1), points.shape[0] - 1)
    lo = hi - 1

    span = (cumulative[hi] - cumulative[lo]).item()
    if span <= 0.0:
        return points[hi].clone()

    frac = (d - cumulative[lo].item()) / span
    return points[lo] + frac * (points[hi] - points[lo])


def round_to_precision(values: torch.Tensor, precision: Optional[int]) -> torch.Tensor:
    """Round coordinates to a number of fractional digits.

    Parameters
    ----------
    values : torch.Tensor
        Any float tensor
    precision : int, optional
        Fractional digits (≥ 0); None returns the input unchanged

    Returns
    -------
    torch.Tensor
        Rounded tensor (same shape/dtype)

    Notes
    -----
    Exact ties round away from zero (0.125 → 0.13, 2.5 → 3), unlike
    ``torch.round`` which rounds half to even.
    """
    if precision is None:
        return values
    scale = 10.0 ** int(precision)
    return torch.sign(values) * torch.floor(torch.abs(values) * scale + 0.5) / scale
