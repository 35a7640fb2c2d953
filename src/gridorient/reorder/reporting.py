# -*- coding: utf-8 -*-
"""
This module provides reporting functions for cell reordering.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .summary import ReorderSummary

_PASS_NAMES = {2: "Side Chains", 3: "Edge Sheets"}


def format_reorder_summary(summary: "ReorderSummary") -> str:
    """
    Formats a summary of a completed cell reordering.
    """
    if not summary:
        return "Reordering not performed."

    report = []
    report.append(f"\n{'--- Cell Reordering Summary ---':^80}")
    report.append(_format_counts(summary))
    report.append(_format_rotation_table(summary))
    return "\n".join(report)


def _format_counts(summary: "ReorderSummary") -> str:
    """Formats the table of mesh and reordering counts."""
    pass_name = _PASS_NAMES.get(summary.dimension, "Propagation Passes")
    rows = [
        ("Dimension", summary.dimension),
        ("Cells", summary.n_cells),
        ("Unique Edges", summary.n_edges),
        ("Boundary Faces", summary.n_boundary_faces),
        ("Connected Components", summary.n_components),
        (pass_name, summary.n_sheets),
        ("Rotated Cells", summary.n_rotated_cells),
        ("Inverted Cells", summary.n_inverted_cells),
    ]
    lines = [f"  {name:<25} {value:>15}" for name, value in rows]
    return "\n".join(lines)


def _format_rotation_table(summary: "ReorderSummary") -> str:
    """Formats the histogram of rotation codes."""
    lines = []
    lines.append(f"\n{'--- Rotation Codes ---':^80}")
    if summary.n_rotated_cells == 0:
        lines.append("  All cells kept their vertex order.")
        return "\n".join(lines)

    lines.append(f"  {'Code':<25} {'Cells':>15} {'Share (%)':>15}")
    lines.append(f"  {'-'*24} {'-'*15} {'-'*15}")
    for code, count in enumerate(summary.rotation_counts):
        if count:
            share = 100.0 * count / summary.n_cells
            lines.append(f"  {code:<25} {count:>15} {share:>15.2f}")
    return "\n".join(lines)
