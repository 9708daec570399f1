"""SVG serialization of segments, outlines and render primitives.

Path data uses absolute ``M``/``L`` commands only; numbers are written with
the shortest representation that round-trips (``10`` rather than ``10.0``).
"""

from typing import Iterable, Mapping, Optional, Sequence, Tuple
from xml.sax.saxutils import quoteattr

from src.utils import geometry


def format_number(value: float) -> str:
    """Compact decimal form: integral floats lose their ``.0``; ``-0`` → ``0``."""
    value = float(value)
    if value == 0.0:
        return "0"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def to_path_data(points: Iterable, closed: bool = False) -> str:
    """Serialize a point sequence to SVG path data.

    Parameters
    ----------
    points : iterable of samples or (x, y)
        Polyline vertices
    closed : bool
        Append ``Z`` (used for outline polygons)

    Returns
    -------
    str
        ``"M x0 y0 L x1 y1 ... [Z]"``; empty string for no points
    """
    commands = []
    for i, p in enumerate(points):
        x, y = (p.x, p.y) if hasattr(p, 'x') else (p[0], p[1])
        commands.append(f"{'M' if i == 0 else 'L'}{format_number(x)} {format_number(y)}")
    if commands and closed:
        commands.append("Z")
    return " ".join(commands)


def element(tag: str, attrs: Mapping[str, Optional[object]], children: Sequence[str] = ()) -> str:
    """Render one SVG element; attributes whose value is None are omitted."""
    attr_str = "".join(
        f" {name}={quoteattr(format_number(v) if isinstance(v, float) else str(v))}"
        for name, v in attrs.items()
        if v is not None
    )
    if not children:
        return f"<{tag}{attr_str}/>"
    return f"<{tag}{attr_str}>" + "".join(children) + f"</{tag}>"


def bbox_view_box(points: Iterable[Tuple[float, float]], margin: float = 0.0) -> str:
    """``viewBox`` attribute value covering all points plus a margin.

    Points must be non-empty; a sampled path always has at least two.
    """
    xmin, ymin, xmax, ymax = geometry.polyline_bbox(geometry.as_points(list(points)))
    x0, y0 = xmin - margin, ymin - margin
    return " ".join(format_number(v) for v in (
        x0, y0, xmax + margin - x0, ymax + margin - y0
    ))
