"""Outline a polyline segment into a closed ribbon polygon.

For a segment of N samples the outliner offsets every sample perpendicular
to an edge direction by ``width / 2`` on both sides:

    pA = p + r * ( sin(a), -cos(a))      rail A
    pB = p + r * (-sin(a),  cos(a))      rail B

where ``a = atan2(dy, dx)`` of the edge ending at ``p`` (the first sample
uses the first edge). Emitting pairs in sample order gives

    [p0A, p0B, p1A, p1B, ..., pN-1A, pN-1B]

which alternates rails and is not a valid winding. ``close_ribbon`` fixes
the order: even positions forward (rail A), then odd positions reversed
(rail B), e.g. for N=4: 0, 2, 4, 6, 7, 5, 3, 1.

No joins are computed between edges; sharp concave turns can make the
ribbon overlap itself.
"""

import logging
import math
from typing import Iterable, List, Optional, Tuple, Union

import torch

from src.utils import geometry

from .errors import DegenerateSegment, InvalidConfiguration
from .sampler import validate_precision

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def _segment_points(segment: Union[Iterable, torch.Tensor]) -> torch.Tensor:
    """Coordinates of a segment as (N, 2) float64, from samples or pairs."""
    if isinstance(segment, torch.Tensor):
        return geometry.as_points(segment)
    coords = [
        (s.x, s.y) if hasattr(s, 'x') else (s[0], s[1])
        for s in segment
    ]
    return geometry.as_points(coords)


def edge_angles(points: torch.Tensor) -> torch.Tensor:
    """Direction of each edge ``points[i] → points[i+1]``, shape (N-1,)."""
    d = points[1:] - points[:-1]
    return torch.atan2(d[:, 1], d[:, 0])


def perpendicular_points(
    angle: torch.Tensor,
    radius: float,
    anchor: torch.Tensor,
    precision: Optional[int] = None
) -> torch.Tensor:
    """Offset anchors perpendicular to their edge angle on both sides.

    Parameters
    ----------
    angle : torch.Tensor
        Edge angles in radians, shape (...,)
    radius : float
        Offset distance (half the ribbon width)
    anchor : torch.Tensor
        Points to offset, shape (..., 2)
    precision : int, optional
        Fractional digits to round to; None for no rounding

    Returns
    -------
    torch.Tensor
        Shape (..., 2, 2): ``[..., 0, :]`` is rail A, ``[..., 1, :]`` rail B
    """
    offset = radius * torch.stack([torch.sin(angle), -torch.cos(angle)], dim=-1)
    pairs = torch.stack([anchor + offset, anchor - offset], dim=-2)
    return geometry.round_to_precision(pairs, precision)


def rail_pairs(
    segment: Union[Iterable, torch.Tensor],
    width: float,
    precision: Optional[int] = None
) -> torch.Tensor:
    """Accumulate perpendicular point pairs in emission order.

    Returns
    -------
    torch.Tensor
        Shape (2N, 2): ``[p0A, p0B, p1A, p1B, ...]``

    Raises
    ------
    DegenerateSegment
        If the segment has fewer than two samples
    """
    pts = _segment_points(segment)
    if pts.shape[0] < 2:
        raise DegenerateSegment(
            f"Cannot outline a segment with {pts.shape[0]} sample(s); need at least 2"
        )

    angles = edge_angles(pts)
    # First sample is seeded with the first edge; sample k ≥ 1 uses edge k-1
    anchor_angles = torch.cat([angles[:1], angles])
    pairs = perpendicular_points(anchor_angles, width / 2.0, pts, precision)
    return pairs.reshape(-1, 2)


def close_ribbon(pairs: torch.Tensor) -> torch.Tensor:
    """Reorder alternating rail points into a closed ring.

    Parameters
    ----------
    pairs : torch.Tensor
        Shape (2N, 2) in emission order ``[A0, B0, A1, B1, ...]``

    Returns
    -------
    torch.Tensor
        Shape (2N, 2): ``[A0, A1, ..., AN-1, BN-1, ..., B1, B0]``
    """
    rail_a = pairs[0::2]
    rail_b = pairs[1::2].flip(0)
    return torch.cat([rail_a, rail_b], dim=0)


def outline_stroke(
    segment: Union[Iterable, torch.Tensor],
    width: float,
    precision: Optional[int] = None
) -> List[Point]:
    """Closed ribbon polygon of the given width around a segment.

    Parameters
    ----------
    segment : Segment, sequence of samples/(x, y), or torch.Tensor
        Polyline with at least two points
    width : float
        Ribbon width (≥ 0); 0 collapses both rails onto the polyline
    precision : int, optional
        Fractional digits to round offsets to; None for no rounding

    Returns
    -------
    List[Tuple[float, float]]
        ``2 * len(segment)`` points: rail A forward then rail B backward

    Raises
    ------
    InvalidConfiguration
        If width is negative or not finite, or precision is out of range
    DegenerateSegment
        If the segment has fewer than two samples

    Examples
    --------
    >>> outline_stroke([(0, 0), (10, 0)], width=4)
    [(0.0, -2.0), (10.0, -2.0), (10.0, 2.0), (0.0, 2.0)]
    """
    width = float(width)
    if not math.isfinite(width) or width < 0:
        raise InvalidConfiguration(f"width must be a finite number >= 0, got {width}")
    precision = validate_precision(precision)

    ring = close_ribbon(rail_pairs(segment, width, precision))
    return [(x, y) for x, y in ring.tolist()]
