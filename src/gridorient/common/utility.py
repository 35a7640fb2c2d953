import logging

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon, Rectangle
from matplotlib.collections import PatchCollection

from ..reorder.geometry_info import QUAD_SIDES

logger = logging.getLogger(__name__)

ELEMENT_COLORS = {
    4: ("#90EE90", "Quad"),
    "other": ("#D3D3D3", "Other"),
}

# Fraction by which side arrows are pulled towards the cell centroid.
SIDE_ARROW_INSET = 0.15


def polygon_area(points):
    """Calculates the area of a polygon using the shoelace formula."""
    x = points[:, 0]
    y = points[:, 1]
    return 0.5 * np.abs(np.dot(x, np.roll(y, 1)) - np.dot(y, np.roll(x, 1)))


def get_geometry_extent(nodes):
    """Computes the extent of the geometry based on node coordinates."""
    min_coords = np.min(nodes, axis=0)
    max_coords = np.max(nodes, axis=0)
    extent = np.linalg.norm(max_coords - min_coords)
    return extent if extent > 0 else 1.0


def side_arrows(nodes, cells, inset=SIDE_ARROW_INSET):
    """
    Computes one arrow per quadrilateral side in its local default direction.

    Each arrow is moved towards the centroid of its cell, so the two arrows
    drawn for a shared side stay distinguishable.

    Returns:
        tuple: Arrow start points (n, 2) and arrow vectors (n, 2).
    """
    starts, vectors = [], []
    for cell_conn in cells:
        if len(cell_conn) != 4:
            continue
        points = nodes[list(cell_conn)]
        centroid = np.mean(points, axis=0)
        shrunk = points + inset * (centroid - points)
        for a, b in QUAD_SIDES:
            starts.append(shrunk[a])
            vectors.append(shrunk[b] - shrunk[a])
    return np.reshape(starts, (-1, 2)), np.reshape(vectors, (-1, 2))


def plot_mesh(
    ax,
    nodes,
    cells,
    show_nodes=False,
    show_cells=False,
    show_sides=True,
    codes=None,
    title="Mesh",
):
    """
    Plots a 2D mesh with options for labels, side directions and rotation codes.

    Args:
        ax: Matplotlib axes object.
        nodes (np.ndarray): Array of node coordinates (num_nodes, 2) or (num_nodes, 3).
        cells (list): List of lists, where each inner list contains the node indices for a cell.
        show_nodes (bool): Whether to display node labels.
        show_cells (bool): Whether to display cell labels.
        show_sides (bool): Whether to draw every side as an arrow in its
            local default direction.
        codes (np.ndarray, optional): Rotation code of each cell, used for coloring.
        title (str, optional): The title for the plot.
    """
    nodes = np.asarray(nodes, dtype=float)
    if nodes.shape[1] > 2:
        nodes = nodes[:, :2]

    geometry_extent = get_geometry_extent(nodes)

    code_colors = None
    if codes is not None:
        codes = np.asarray(codes)
        unique_codes = np.unique(codes)
        cmap = plt.get_cmap("tab10")
        code_colors = {code: cmap(int(code) % 10) for code in unique_codes}

    patches = []
    for i, cell_conn in enumerate(cells):
        points = nodes[list(cell_conn)]

        if code_colors is not None:
            color = code_colors[codes[i]]
        else:
            color, _ = ELEMENT_COLORS.get(len(cell_conn), ELEMENT_COLORS["other"])

        patches.append(Polygon(points, facecolor=color, edgecolor="k", alpha=0.7, lw=0.5))

        if show_cells:
            area = polygon_area(points)
            font_scale_factor = np.sqrt(area) / geometry_extent
            cell_fontsize = min(max(2, int(font_scale_factor * 120)), 10)

            cell_centroid = np.mean(points, axis=0)
            ax.text(
                cell_centroid[0],
                cell_centroid[1],
                str(i),
                color="black",
                ha="center",
                va="center",
                fontsize=cell_fontsize,
                weight="bold",
                bbox=dict(
                    facecolor="white",
                    alpha=0.6,
                    edgecolor="none",
                    boxstyle="round,pad=0.2",
                ),
            )

    ax.add_collection(PatchCollection(patches, match_original=True))

    if show_sides:
        starts, vectors = side_arrows(nodes, cells)
        if len(starts):
            ax.quiver(
                starts[:, 0],
                starts[:, 1],
                vectors[:, 0],
                vectors[:, 1],
                angles="xy",
                scale_units="xy",
                scale=1.0,
                width=0.004,
                color="navy",
            )

    if show_nodes:
        used = sorted({int(n) for cell_conn in cells for n in cell_conn})
        node_fontsize = min(max(2, int(100 / np.sqrt(max(len(used), 1)))), 10)
        for i in used:
            ax.text(
                nodes[i, 0],
                nodes[i, 1],
                str(i),
                color="darkred",
                ha="center",
                va="center",
                fontsize=node_fontsize,
                bbox=dict(
                    facecolor="yellow",
                    alpha=0.6,
                    edgecolor="none",
                    boxstyle="round,pad=0.1",
                ),
            )

    ax.set_title(title, fontsize=18, pad=20)
    ax.set_xlabel("X", fontsize=14, labelpad=8)
    ax.set_ylabel("Y", fontsize=14, labelpad=8)
    ax.grid(True, linestyle="--", alpha=0.5)
    ax.set_aspect("equal", adjustable="box")
    ax.tick_params(axis="both", which="major", pad=2, labelsize=12)
    ax.autoscale_view()

    for spine in ax.spines.values():
        spine.set_visible(False)

    legend_handles = []
    if code_colors is not None:
        for code, color in code_colors.items():
            count = int(np.sum(codes == code))
            legend_handles.append(
                Rectangle((0, 0), 1, 1, color=color, label=f"Code {code} (#{count})")
            )
    else:
        cell_counts = {}
        for cell in cells:
            _, label = ELEMENT_COLORS.get(len(cell), ELEMENT_COLORS["other"])
            cell_counts[label] = cell_counts.get(label, 0) + 1

        for color, label in ELEMENT_COLORS.values():
            count = cell_counts.get(label, 0)
            if count > 0:
                legend_handles.append(
                    Rectangle((0, 0), 1, 1, color=color, label=f"{label} (#{count})")
                )

    ax.legend(
        handles=legend_handles,
        loc="upper left",
        bbox_to_anchor=(1.0, 1.0),
        fontsize=14,
        frameon=False,
        ncol=1,
    )


def save_mesh_plot(filepath, nodes, cells, codes=None, show_nodes=True, title="Mesh Plot"):
    """
    Plots a 2D mesh with its side directions and saves the figure to a file.

    Args:
        filepath (str): The path to save the plot image.
        nodes (np.ndarray): Node coordinates.
        cells (list): Quadrilateral cells.
        codes (np.ndarray, optional): Rotation codes for coloring the cells.
        show_nodes (bool): Whether to display node labels.
        title (str): The title for the plot.
    """
    fig, ax = plt.subplots(figsize=(10, 8))
    plot_mesh(
        ax,
        nodes,
        cells,
        show_nodes=show_nodes,
        show_cells=True,
        show_sides=True,
        codes=codes,
        title=title,
    )
    fig.savefig(filepath, dpi=150, bbox_inches="tight")
    plt.close(fig)
    logger.info("Mesh plot saved to: %s", filepath)
