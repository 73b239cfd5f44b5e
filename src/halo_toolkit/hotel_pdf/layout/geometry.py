"""
Module: hotel_pdf.layout.geometry

Purpose:
    Pure geometry for the hotel image grid: cell placement and
    aspect-preserving scale-to-fit. No I/O.

Key Functions:
    - grid_layout(): Row-major cells of a fixed 2-column grid
    - grid_rows() / grid_height(): Grid extent
    - scale_to_fit(): Uniform downscale into a bounding size
    - fit_box(): Scaled image box anchored in a cell

Dependencies:
    - hotel_pdf.layout.models: LayoutBox

Used By:
    - hotel_pdf.layout.composer: Cover image and hotel grids
"""

from __future__ import annotations

import math
from typing import List, Tuple

from .models import LayoutBox

DEFAULT_MAX_CELLS = 6
DEFAULT_COLUMNS = 2


def grid_rows(
    asset_count: int,
    *,
    max_cells: int = DEFAULT_MAX_CELLS,
    columns: int = DEFAULT_COLUMNS,
) -> int:
    """
    Number of grid rows used for `asset_count` assets.

    Example:
        >>> grid_rows(3)
        2
        >>> grid_rows(10)
        3
    """
    cells = min(max(asset_count, 0), max_cells)
    return math.ceil(cells / columns)


def grid_height(
    asset_count: int,
    row_height: float,
    gutter: float,
    *,
    max_cells: int = DEFAULT_MAX_CELLS,
    columns: int = DEFAULT_COLUMNS,
) -> float:
    """
    Vertical space consumed by the grid, including the gap under each row.

    Example:
        >>> grid_height(3, row_height=60, gutter=10)
        140
    """
    return grid_rows(asset_count, max_cells=max_cells, columns=columns) * (row_height + gutter)


def grid_layout(
    asset_count: int,
    box: LayoutBox,
    *,
    gutter: float,
    row_height: float,
    max_cells: int = DEFAULT_MAX_CELLS,
    columns: int = DEFAULT_COLUMNS,
) -> List[LayoutBox]:
    """
    Compute grid cells for a hotel's images.

    Cells fill row-major (left-to-right, top-to-bottom) starting at the
    top-left of `box`. Only `min(asset_count, max_cells)` cells are
    returned; when the last row is short its remaining slots stay empty
    and no cell is stretched.

    Args:
        asset_count: Number of images supplied
        box: Area the grid starts in (x, y, width used; height ignored)
        gutter: Gap between columns and between rows
        row_height: Height of every cell
        max_cells: Grid capacity (images beyond it are ignored)
        columns: Number of columns

    Returns:
        Cells in fill order

    Example:
        >>> cells = grid_layout(3, LayoutBox(0, 0, 210, 200), gutter=10, row_height=60)
        >>> [(c.x, c.y) for c in cells]
        [(0, 0), (110.0, 0), (0, 70)]
    """
    count = min(max(asset_count, 0), max_cells)
    if count == 0:
        return []

    cell_width = (box.width - gutter * (columns - 1)) / columns
    if cell_width <= 0:
        raise ValueError(f"Grid box too narrow for {columns} columns: {box.width}")

    cells: List[LayoutBox] = []
    for index in range(count):
        row, col = divmod(index, columns)
        cells.append(LayoutBox(
            x=box.x + col * (cell_width + gutter),
            y=box.y + row * (row_height + gutter),
            width=cell_width,
            height=row_height,
        ))
    return cells


def scale_to_fit(
    native: Tuple[float, float],
    max_box: Tuple[float, float],
) -> Tuple[float, float]:
    """
    Scale a size uniformly to fit inside `max_box`, never enlarging it.

    Uses a single factor s = min(1, W/w, H/h), so the aspect ratio is
    preserved whichever side is the binding constraint.

    Args:
        native: (w, h) natural size
        max_box: (W, H) bounding size

    Returns:
        (w * s, h * s)

    Raises:
        ValueError: If any dimension is not positive

    Example:
        >>> scale_to_fit((400, 200), (100, 100))
        (100.0, 50.0)
        >>> scale_to_fit((40, 20), (100, 100))
        (40.0, 20.0)
    """
    w, h = native
    max_w, max_h = max_box
    if w <= 0 or h <= 0:
        raise ValueError(f"Native size must be positive: {w}x{h}")
    if max_w <= 0 or max_h <= 0:
        raise ValueError(f"Bounding size must be positive: {max_w}x{max_h}")

    s = min(1.0, max_w / w, max_h / h)
    return (w * s, h * s)


def fit_box(native: Tuple[float, float], cell: LayoutBox) -> LayoutBox:
    """
    Box for an image scaled into `cell`, anchored at the cell's top-left.

    Example:
        >>> fit_box((400, 200), LayoutBox(10, 10, 100, 100))
        LayoutBox(x=10, y=10, width=100.0, height=50.0)
    """
    width, height = scale_to_fit(native, (cell.width, cell.height))
    return LayoutBox(x=cell.x, y=cell.y, width=width, height=height)
