from __future__ import annotations

import logging
from copy import copy
from io import BytesIO
from pathlib import Path
from typing import Optional, Union
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.drawing.image import Image
from openpyxl.cell.cell import MergedCell
from openpyxl.utils import column_index_from_string, get_column_letter
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from ..core.constants import TEMPLATE_HEADER_ROWS
from ..core.exceptions import ExportError

logger = logging.getLogger(__name__)


def load_template(path: Union[str, Path]) -> Workbook:
    """Open the branded template workbook; raises ExportError when unusable."""
    try:
        return load_workbook(str(path))
    except (OSError, KeyError, ValueError, BadZipFile, InvalidFileException) as e:
        raise ExportError(f"Cannot load report template {path}: {e}") from e


def try_load_template(path: Optional[Union[str, Path]]) -> Optional[Workbook]:
    if not path:
        logger.warning("No report template configured, using basic layout")
        return None
    try:
        return load_template(path)
    except ExportError as e:
        logger.warning("%s; using basic layout", e)
        return None


def copy_cell_style(source, target) -> None:
    if not source.has_style:
        return
    target.font = copy(source.font)
    target.fill = copy(source.fill)
    target.border = copy(source.border)
    target.alignment = copy(source.alignment)
    target.number_format = source.number_format
    target.protection = copy(source.protection)


def copy_header(source: Worksheet, target: Worksheet, *, max_columns: Optional[int] = None, images: bool = False) -> None:
    """Copy the template's header band (values, styles, heights, merges) onto ``target``.

    Column widths are copied for every defined column, or the first
    ``max_columns`` when given.
    """
    rows = TEMPLATE_HEADER_ROWS

    for letter, dim in list(source.column_dimensions.items()):
        if not dim.width:
            continue
        first = dim.min or column_index_from_string(letter)
        last = dim.max or first
        if max_columns is not None:
            last = min(last, max_columns)
        for idx in range(first, last + 1):
            target.column_dimensions[get_column_letter(idx)].width = dim.width

    for r in range(1, rows + 1):
        height = source.row_dimensions[r].height
        if height:
            target.row_dimensions[r].height = height
        for c in range(1, source.max_column + 1):
            cell = source.cell(row=r, column=c)
            if cell.value is None and not cell.has_style:
                continue
            new = target.cell(row=r, column=c)
            if not isinstance(cell, MergedCell):
                new.value = cell.value
            copy_cell_style(cell, new)

    for rng in list(source.merged_cells.ranges):
        if rng.min_row <= rows:
            target.merge_cells(rng.coord)

    if images:
        copy_header_images(source, target)


def copy_header_images(source: Worksheet, target: Worksheet) -> int:
    copied = 0
    for img in getattr(source, "_images", []):
        anchor = img.anchor
        marker = getattr(anchor, "_from", None)
        if marker is None or marker.row + 1 > TEMPLATE_HEADER_ROWS:
            continue
        new = Image(BytesIO(img._data()))
        new.width, new.height = img.width, img.height
        new.anchor = copy(anchor)
        target.add_image(new)
        copied += 1
    return copied


def set_widths(ws: Worksheet, widths) -> None:
    for idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width
