"""YAML schema validation and config loading.

Provides centralized validation for configuration files using pydantic:
    - Sampling schema: segment/sample counts and coordinate precision
    - Element schema: one rendered element type (path or circle) with width
    - Path source schema: SVG path data, polyline points, a cubic Bézier or
      a <path> element of an SVG file
    - Job schema (gradient_path.v1.yaml): complete render request

All modules must use these validators to load configs for fail-fast error
detection with actionable messages (offending keys, expected ranges).

Usage:
    from src.utils import validators

    job = validators.load_job_config("configs/gradient_path_example.yaml")
    job.data.segments, job.data.samples, job.data.precision
"""

from pathlib import Path
from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_PRECISION = 2
MAX_PRECISION = 15


# ============================================================================
# SAMPLING / ELEMENT SCHEMA
# ============================================================================

class SamplingConfig(BaseModel):
    """How finely to sample the path and how to group the samples."""
    segments: int = Field(..., ge=1, description="Number of segments")
    samples: int = Field(..., ge=1, description="Samples per segment (incl. shared boundary)")
    precision: Optional[int] = Field(
        DEFAULT_PRECISION, ge=0, le=MAX_PRECISION, description="Fractional digits to round to; null keeps full precision"
    )


class ElementConfig(BaseModel):
    """One element rendered along the path.

    ``path`` elements produce one primitive per segment: filled outlines when
    ``width`` is set, stroked polylines otherwise. ``circle`` elements produce
    one circle of diameter ``width`` per flattened sample.
    """
    type: Literal["path", "circle"] = Field(..., description="Primitive type")
    width: Optional[float] = Field(None, ge=0.0, allow_inf_nan=False, description="Outline width / circle diameter")
    fill: Optional[str] = Field(None, description="Fill paint passed through to the renderer")
    stroke: Optional[str] = Field(None, description="Stroke paint passed through to the renderer")
    stroke_width: Optional[float] = Field(None, ge=0.0, description="Stroke width for the renderer")

    @model_validator(mode='after')
    def validate_circle_width(self) -> 'ElementConfig':
        if self.type == "circle" and self.width is None:
            raise ValueError("circle elements require a width (circle diameter)")
        return self


# ============================================================================
# PATH SOURCE SCHEMA
# ============================================================================

class BezierSource(BaseModel):
    """Cubic Bézier control points."""
    p1: Tuple[float, float] = Field(..., description="Start point (x, y)")
    p2: Tuple[float, float] = Field(..., description="First control point (x, y)")
    p3: Tuple[float, float] = Field(..., description="Second control point (x, y)")
    p4: Tuple[float, float] = Field(..., description="End point (x, y)")


class PathSource(BaseModel):
    """Where the path geometry comes from (exactly one source)."""
    d: Optional[str] = Field(None, description="SVG path data")
    points: Optional[List[Tuple[float, float]]] = Field(None, description="Polyline vertices")
    bezier: Optional[BezierSource] = Field(None, description="Cubic Bézier")
    svg_file: Optional[str] = Field(None, description="SVG document containing the path")
    element_id: Optional[str] = Field(None, description="id of the <path> inside svg_file")
    max_err: float = Field(0.25, gt=0.0, description="Bézier flattening tolerance")

    @field_validator('points')
    @classmethod
    def validate_points(cls, v: Optional[List[Tuple[float, float]]]) -> Optional[List[Tuple[float, float]]]:
        if v is not None and len(v) == 0:
            raise ValueError("points must contain at least one vertex")
        return v

    @model_validator(mode='after')
    def validate_single_source(self) -> 'PathSource':
        given = [name for name in ('d', 'points', 'bezier', 'svg_file') if getattr(self, name) is not None]
        if len(given) != 1:
            raise ValueError(
                f"Exactly one of d, points, bezier, svg_file must be set, got {given or 'none'}"
            )
        if self.element_id is not None and self.svg_file is None:
            raise ValueError("element_id is only valid together with svg_file")
        return self


# ============================================================================
# JOB SCHEMA V1
# ============================================================================

class GradientPathJobV1(BaseModel):
    """Complete render request (gradient_path.v1.yaml schema)."""
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("gradient_path.v1", alias="schema", description="Schema version")
    path: PathSource
    data: SamplingConfig
    elements: List[ElementConfig] = Field(..., min_length=1, description="Elements to render")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "gradient_path.v1":
            raise ValueError(f"Expected schema 'gradient_path.v1', got '{v}'")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_job_config(path: Union[str, Path]) -> GradientPathJobV1:
    """Load and validate a gradient path job from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to gradient_path.v1.yaml file

    Returns
    -------
    GradientPathJobV1
        Validated job; a relative ``path.svg_file`` is resolved against the
        job file's directory

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Job config not found: {path}")

    data = fs.load_yaml(path)
    if not isinstance(data, dict):
        raise ValueError(f"Job config at {path} must be a mapping, got {type(data).__name__}")
    try:
        job = GradientPathJobV1(**data)
    except Exception as e:
        raise ValueError(f"Job config validation failed at {path}: {e}") from e

    svg_file = job.path.svg_file
    if svg_file is not None and not Path(svg_file).is_absolute():
        job.path.svg_file = str(path.parent / svg_file)

    return job
