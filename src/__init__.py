"""Gradient Path: sample vector paths into overlapping, styleable segments.

This package contains the core modules for walking a path's arc length,
grouping the samples into overlapping segments, and outlining segments into
closed ribbons so callers can render multi-color or multi-shape gradients
along any path.

Architecture layers (strict one-way dependency):
    scripts/ → src/gradient_path/ → src/utils/

Key invariants:
    - Samples are immutable and produced once per sampling call
    - Adjacent segments share their boundary sample (by value)
    - YAML-only configs, no JSON
    - All core computations are pure and synchronous
"""

__version__ = "1.0.0"
