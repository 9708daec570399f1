"""Orchestration: path → segments → render primitives.

``get_data`` is the main data function (sample, then segment). ``GradientPath``
turns a path plus element configs into render-ready primitives:

    path element,  width set    → one filled outline polygon per segment
    path element,  no width     → one stroked polyline per segment
    circle element              → one circle per flattened sample

Each primitive carries the ``progress`` a renderer should use to pick its
color or stroke; computing that style is left to the caller. Fill, stroke
and stroke width from the element config are passed through untouched.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from src.utils.validators import ElementConfig, GradientPathJobV1, PathSource

from . import svg
from .errors import InvalidConfiguration
from .flatten import flatten
from .outline import outline_stroke
from .providers import BezierPath, PathGeometryProvider, PolylinePath, SVGPath
from .sampler import DEFAULT_PRECISION, effective_samples_per_segment, sample_path
from .samples import SegmentSet
from .segmenter import segment_samples

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def get_data(
    path: PathGeometryProvider,
    segments: int,
    samples: int,
    precision: Optional[int] = DEFAULT_PRECISION
) -> SegmentSet:
    """Sample a path and group the samples into overlapping segments.

    Parameters
    ----------
    path : PathGeometryProvider
        Path geometry
    segments : int
        Number of segments (≥ 1)
    samples : int
        Samples per segment, including the boundary shared with the next (≥ 1)
    precision : int, optional
        Fractional digits to round coordinates to; None keeps full precision

    Returns
    -------
    SegmentSet
        ``segments`` segments of ``effective + 1`` samples each
    """
    all_samples = sample_path(path, segments, samples, precision)
    return segment_samples(all_samples, segments, effective_samples_per_segment(samples))


def outline_segments(
    segment_set: SegmentSet,
    width: float,
    precision: Optional[int] = None
) -> List[List[Point]]:
    """Outline every segment independently (one ribbon per segment)."""
    return [outline_stroke(segment, width, precision) for segment in segment_set]


def provider_from_source(
    source: PathSource,
    base_dir: Optional[Union[str, Path]] = None
) -> PathGeometryProvider:
    """Build the geometry provider described by a validated path source.

    A relative ``svg_file`` is resolved against ``base_dir`` when given.
    """
    if source.d is not None:
        return SVGPath(source.d)
    if source.points is not None:
        return PolylinePath(source.points)
    if source.bezier is not None:
        b = source.bezier
        return BezierPath(b.p1, b.p2, b.p3, b.p4, max_err=source.max_err)

    svg_file = Path(source.svg_file)
    if base_dir is not None and not svg_file.is_absolute():
        svg_file = Path(base_dir) / svg_file
    return SVGPath.from_svg_file(svg_file, source.element_id)


# ============================================================================
# RENDER PRIMITIVES
# ============================================================================

@dataclass(frozen=True, slots=True)
class PathPrimitive:
    """One segment as path data, filled (outline) or stroked (polyline)."""

    segment_id: int
    d: str
    progress: float
    filled: bool
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None

    css_class = "path-segment"

    def to_svg(self) -> str:
        return svg.element("path", {
            "class": self.css_class,
            "d": self.d,
            "fill": self.fill if self.fill is not None else (None if self.filled else "none"),
            "stroke": self.stroke,
            "stroke-width": self.stroke_width,
            "data-segment": self.segment_id,
            "data-progress": svg.format_number(self.progress),
        })


@dataclass(frozen=True, slots=True)
class CirclePrimitive:
    """One flattened sample as a circle."""

    segment_id: int
    cx: float
    cy: float
    r: float
    progress: float
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None

    css_class = "circle-sample"

    def to_svg(self) -> str:
        return svg.element("circle", {
            "class": self.css_class,
            "cx": float(self.cx),
            "cy": float(self.cy),
            "r": float(self.r),
            "fill": self.fill,
            "stroke": self.stroke,
            "stroke-width": self.stroke_width,
            "data-segment": self.segment_id,
            "data-progress": svg.format_number(self.progress),
        })


Primitive = Union[PathPrimitive, CirclePrimitive]


class GradientPath:
    """Segments of one path plus the primitives for each configured element.

    Parameters
    ----------
    path : PathGeometryProvider
        Path geometry
    segments, samples : int
        Sampling configuration (see ``get_data``)
    precision : int, optional
        Rounding applied to samples and outline points
    elements : list[ElementConfig]
        Elements to render, in drawing order

    Examples
    --------
    >>> gp = GradientPath(SVGPath("M0 0 L100 0"), segments=4, samples=3,
    ...                   elements=[ElementConfig(type="path", width=6)])
    >>> len(gp.render()[0][1])
    4
    """

    def __init__(
        self,
        path: PathGeometryProvider,
        segments: int,
        samples: int,
        precision: Optional[int] = DEFAULT_PRECISION,
        elements: Optional[List[ElementConfig]] = None
    ):
        self.path = path
        self.precision = precision
        self.elements = list(elements or [])
        self.data = get_data(path, segments, samples, precision)

        logger.info(
            "Built %d segments of %d samples (precision=%s)",
            len(self.data), self.data.effective_samples_per_segment + 1, precision
        )

    @classmethod
    def from_job(
        cls,
        job: GradientPathJobV1,
        base_dir: Optional[Union[str, Path]] = None
    ) -> "GradientPath":
        """Build from a validated job config."""
        provider = provider_from_source(job.path, base_dir)
        return cls(
            provider,
            segments=job.data.segments,
            samples=job.data.samples,
            precision=job.data.precision,
            elements=job.elements
        )

    def render_element(self, element: ElementConfig) -> List[Primitive]:
        """Primitives for one element config.

        Raises
        ------
        InvalidConfiguration
            Negative width, or a circle element without width
        """
        if element.width is not None and element.width < 0:
            raise InvalidConfiguration(f"width must be >= 0, got {element.width}")

        style = dict(fill=element.fill, stroke=element.stroke, stroke_width=element.stroke_width)

        if element.type == "path":
            primitives = []
            for segment in self.data:
                if element.width:
                    d = svg.to_path_data(outline_stroke(segment, element.width, self.precision), closed=True)
                else:
                    d = svg.to_path_data(segment)
                primitives.append(PathPrimitive(
                    segment_id=segment.index,
                    d=d,
                    progress=segment.middle.progress,
                    filled=bool(element.width),
                    **style
                ))
            return primitives

        if element.type == "circle":
            if element.width is None:
                raise InvalidConfiguration("circle elements require a width")
            r = element.width / 2.0
            return [
                CirclePrimitive(
                    segment_id=sample.id,
                    cx=sample.x,
                    cy=sample.y,
                    r=r,
                    progress=sample.progress,
                    **style
                )
                for sample in flatten(self.data)
            ]

        raise InvalidConfiguration(f"Unknown element type: {element.type!r}")

    def render(self) -> List[Tuple[ElementConfig, List[Primitive]]]:
        """Primitives for every element, in configuration order."""
        rendered = []
        for element in self.elements:
            primitives = self.render_element(element)
            logger.debug("Element %s: %d primitives", element.type, len(primitives))
            rendered.append((element, primitives))
        return rendered

    def to_svg_group(self) -> str:
        """``<g class="gradient-path">`` with one ``<g class="element-{type}">`` per element."""
        groups = [
            svg.element("g", {"class": f"element-{element.type}"}, [p.to_svg() for p in primitives])
            for element, primitives in self.render()
        ]
        return svg.element("g", {"class": "gradient-path"}, groups)

    def to_svg_document(self, margin: float = 10.0) -> str:
        """Standalone SVG document sized to the sampled path plus a margin."""
        widest = max(((e.width or 0.0) for e in self.elements), default=0.0)
        view_box = svg.bbox_view_box([s.as_point() for s in self.data.samples], margin + widest / 2.0)
        return svg.element(
            "svg",
            {"xmlns": "http://www.w3.org/2000/svg", "viewBox": view_box},
            [self.to_svg_group()]
        )
