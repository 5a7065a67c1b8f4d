"""Command line entry points for supplementary track tooling."""

from .simplify_track import load_points, render_output, run

__all__ = ["load_points", "render_output", "run"]
