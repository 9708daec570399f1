#!/usr/bin/env python3
"""Render a path into gradient segments, outlines and an SVG preview.

CLI tool that samples a path into overlapping segments and writes the
segment data, the outline polygons and an SVG document of the configured
elements.

Usage:
    # From a job YAML (gradient_path.v1 schema)
    python scripts/render_gradient_path.py --job configs/gradient_path_example.yaml --output_dir outputs/wave

    # Inline SVG path data
    python scripts/render_gradient_path.py \
        --d "M 0 0 C 40 0 60 80 100 80" \
        --segments 8 --samples 5 --width 6 \
        --output_dir outputs/inline

Outputs:
    - segments.yaml: samples of every segment (x, y, progress)
    - outlines.yaml: ribbon polygon per segment for every path element with a width
    - gradient.svg: SVG document with one group per element (unless --no_svg)
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from src.gradient_path import GradientPath, GradientPathError, SVGPath, outline_segments
from src.utils import fs, logging_config, validators


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Sample a path into gradient segments and outlines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument('--job', type=str, help='Path to gradient_path.v1 job YAML')
    input_group.add_argument('--d', type=str, help='Inline SVG path data')

    # Inline sampling parameters (ignored with --job)
    parser.add_argument('--segments', type=int, default=10, help='Number of segments')
    parser.add_argument('--samples', type=int, default=5, help='Samples per segment')
    parser.add_argument('--precision', type=int, default=validators.DEFAULT_PRECISION,
                        help='Fractional digits to round coordinates to')
    parser.add_argument('--no_round', action='store_true', help='Keep full coordinate precision')
    parser.add_argument('--width', type=float, default=None,
                        help='Outline width for the inline path element (stroked polylines if omitted)')

    parser.add_argument('--output_dir', type=str, required=True, help='Output directory')
    parser.add_argument('--no_svg', action='store_true', help='Skip the SVG preview')
    parser.add_argument('--log_file', type=str, default=None, help='Optional log file')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

    return parser.parse_args(argv)


def build_inline_job(args: argparse.Namespace) -> validators.GradientPathJobV1:
    """Job config equivalent to the inline arguments."""
    return validators.GradientPathJobV1(
        schema="gradient_path.v1",
        path={'d': args.d},
        data={
            'segments': args.segments,
            'samples': args.samples,
            'precision': None if args.no_round else args.precision,
        },
        elements=[{'type': 'path', 'width': args.width}]
    )


def segments_to_dict(gradient: GradientPath) -> dict:
    """YAML-ready dump of the segment data."""
    data = gradient.data
    return {
        'segments': data.num_segments,
        'samples_per_segment': data.effective_samples_per_segment + 1,
        'precision': gradient.precision,
        'data': [
            [{'x': s.x, 'y': s.y, 'progress': s.progress} for s in segment]
            for segment in data
        ],
    }


def outlines_to_dict(gradient: GradientPath) -> dict:
    """YAML-ready dump of the outline polygons, one entry per wide path element."""
    entries = []
    for i, element in enumerate(gradient.elements):
        if element.type != 'path' or not element.width:
            continue
        polygons = outline_segments(gradient.data, element.width, gradient.precision)
        entries.append({
            'element': i,
            'width': element.width,
            'outlines': [[list(p) for p in polygon] for polygon in polygons],
        })
    return {'elements': entries}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    args = parse_args(argv)

    log_level = "DEBUG" if args.verbose else "INFO"
    logging_config.setup_logging(log_level=log_level, log_file=args.log_file, context={"app": "render"})
    logging_config.install_excepthook()
    logger = logging.getLogger(__name__)

    output_dir = fs.ensure_dir(args.output_dir)

    try:
        if args.job:
            job_path = Path(args.job)
            logging_config.push_context(job=job_path.name)
            logger.info(f"Loading job from: {job_path}")
            job = validators.load_job_config(job_path)
            gradient = GradientPath.from_job(job)
        else:
            logger.info("Using inline path data")
            job = build_inline_job(args)
            gradient = GradientPath(
                SVGPath(args.d),
                segments=job.data.segments,
                samples=job.data.samples,
                precision=job.data.precision,
                elements=job.elements
            )

        segments_path = output_dir / 'segments.yaml'
        fs.atomic_yaml_dump(segments_to_dict(gradient), segments_path)
        logger.info(f"Saved segments: {segments_path}")

        outlines = outlines_to_dict(gradient)
        if outlines['elements']:
            outlines_path = output_dir / 'outlines.yaml'
            fs.atomic_yaml_dump(outlines, outlines_path)
            logger.info(f"Saved outlines: {outlines_path}")

        if not args.no_svg:
            svg_path = output_dir / 'gradient.svg'
            fs.atomic_write_text(svg_path, gradient.to_svg_document())
            logger.info(f"Saved SVG: {svg_path}")

    except (GradientPathError, ValueError, FileNotFoundError) as e:
        logger.error(f"Render failed: {e}")
        return 1
    finally:
        logging_config.pop_context(keys=["job"])

    return 0


if __name__ == "__main__":
    sys.exit(main())
