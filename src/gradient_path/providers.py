"""Path geometry providers.

The sampler only needs two measurements from a path: its total arc length
and the point at a given arc-length distance. ``PathGeometryProvider`` is
that capability; any object with the two methods qualifies.

Implementations:
    - PolylinePath: straight edges between vertices (torch)
    - BezierPath: one cubic Bézier, adaptively flattened to a polyline
    - SVGPath: SVG path data or a <path> element of an SVG file (svgpathtools)

Every provider raises ``GeometryUnavailable`` when it cannot measure the
path (no vertices, non-finite coordinates, unparsable path data).
"""

import logging
import math
from pathlib import Path
from typing import Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

import torch
from svgpathtools import parse_path, svg2paths2

from src.utils import geometry

from .errors import GeometryUnavailable

logger = logging.getLogger(__name__)


@runtime_checkable
class PathGeometryProvider(Protocol):
    """Arc-length measurements over a 2D path."""

    def total_length(self) -> float:
        ...

    def point_at_distance(self, distance: float) -> Tuple[float, float]:
        ...


class PolylinePath:
    """Polyline geometry with linear interpolation between vertices.

    Parameters
    ----------
    points : sequence of (x, y) or torch.Tensor
        Vertices, shape (N, 2), N ≥ 1

    Raises
    ------
    GeometryUnavailable
        If there are no vertices or any coordinate is not finite
    """

    def __init__(self, points: Union[Sequence[Sequence[float]], torch.Tensor]):
        try:
            pts = geometry.as_points(points)
        except (TypeError, ValueError, RuntimeError) as e:
            raise GeometryUnavailable(f"Cannot interpret polyline vertices: {e}") from e

        if pts.shape[0] == 0:
            raise GeometryUnavailable("Polyline has no vertices")
        if not torch.isfinite(pts).all():
            raise GeometryUnavailable("Polyline contains non-finite coordinates")

        self.points = pts
        self._cumulative = geometry.cumulative_arclength(pts)

    def __repr__(self) -> str:
        return f"PolylinePath(n={self.points.shape[0]}, length={self.total_length():.3f})"

    def total_length(self) -> float:
        return self._cumulative[-1].item()

    def point_at_distance(self, distance: float) -> Tuple[float, float]:
        pt = geometry.point_at_arclength(self.points, self._cumulative, distance)
        return (pt[0].item(), pt[1].item())


class BezierPath(PolylinePath):
    """Cubic Bézier measured through its adaptive polyline flattening.

    Parameters
    ----------
    p1, p2, p3, p4 : (x, y)
        Start, control, control, end points
    max_err : float
        Flattening tolerance, default 0.25 (path units)
    """

    def __init__(self, p1, p2, p3, p4, max_err: float = 0.25):
        ctrl = [torch.as_tensor(p, dtype=geometry.DTYPE) for p in (p1, p2, p3, p4)]
        polyline = geometry.bezier_cubic_polyline(*ctrl, max_err=max_err)
        super().__init__(polyline)
        self.control_points = torch.stack(ctrl, dim=0)
        logger.debug("Flattened Bézier into %d vertices", polyline.shape[0])


class SVGPath:
    """SVG path data measured by svgpathtools.

    Parameters
    ----------
    d : str
        Path data (``"M 0 0 L 20 0 C ..."``)

    Notes
    -----
    Arc length is inverted with ``Path.ilength``; the endpoints are
    answered directly so zero and full-length queries are exact.
    """

    def __init__(self, d: str):
        try:
            self.path = parse_path(d)
        except Exception as e:
            raise GeometryUnavailable(f"Cannot parse SVG path data {d!r}: {e}") from e

        if len(self.path) == 0:
            raise GeometryUnavailable(f"SVG path data {d!r} has no drawable segments")

        self.d = d
        self._length = float(self.path.length())
        if not math.isfinite(self._length):
            raise GeometryUnavailable(f"SVG path length is not finite: {self._length}")

    @classmethod
    def from_svg_file(
        cls,
        svg_file: Union[str, Path],
        element_id: Optional[str] = None
    ) -> "SVGPath":
        """Load a ``<path>`` element from an SVG document.

        Parameters
        ----------
        svg_file : str or Path
            SVG document
        element_id : str, optional
            ``id`` attribute of the path; first path if None

        Raises
        ------
        FileNotFoundError
            If the file doesn't exist
        GeometryUnavailable
            If the document has no (matching) path
        """
        svg_file = Path(svg_file)
        if not svg_file.exists():
            raise FileNotFoundError(f"SVG file not found: {svg_file}")

        _, attributes, _ = svg2paths2(str(svg_file))
        for attrs in attributes:
            if element_id is None or attrs.get('id') == element_id:
                d = attrs.get('d')
                if d:
                    return cls(d)

        which = f"with id {element_id!r}" if element_id else "with path data"
        raise GeometryUnavailable(f"No <path> {which} in {svg_file}")

    def __repr__(self) -> str:
        return f"SVGPath(segments={len(self.path)}, length={self._length:.3f})"

    def total_length(self) -> float:
        return self._length

    def point_at_distance(self, distance: float) -> Tuple[float, float]:
        d = min(max(float(distance), 0.0), self._length)
        if d <= 0.0:
            pt = self.path.point(0.0)
        elif d >= self._length:
            pt = self.path.point(1.0)
        else:
            try:
                pt = self.path.point(self.path.ilength(d))
            except Exception as e:
                raise GeometryUnavailable(f"Cannot locate point at distance {d}: {e}") from e
        return (float(pt.real), float(pt.imag))
