"""Render projected sheets into an .xlsx workbook."""

import io

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from tprm_wizard.services.export_projector import SheetTable

HEADER_FILL = PatternFill(start_color="1E293B", end_color="1E293B", fill_type="solid")
HEADER_FONT = Font(name="Calibri", size=11, bold=True, color="FFFFFF")
BODY_FONT = Font(name="Calibri", size=10)

MIN_COLUMN_WIDTH = 12
MAX_COLUMN_WIDTH = 60


def _cell_text(value: str) -> str:
    # Control characters other than tab and newlines are rejected by openpyxl
    return ILLEGAL_CHARACTERS_RE.sub("", value)


def render_workbook(sheets: list[SheetTable]) -> bytes:
    """
    Write one worksheet per sheet table, in order.

    Values are written as text as captured, minus the control characters
    the xlsx format cannot hold.

    Returns:
        The workbook as .xlsx bytes
    """
    wb = Workbook()
    # Drop the default sheet so sheet order matches the projection
    wb.remove(wb.active)

    for sheet in sheets:
        ws = wb.create_sheet(title=sheet.name)
        ws.append(sheet.headers)
        for row in sheet.rows:
            ws.append([_cell_text(value) for value in row])

        for cell in ws[1]:
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            cell.alignment = Alignment(vertical="center")
        for row in ws.iter_rows(min_row=2):
            for cell in row:
                # Captured text starting with "=" stays text, not a formula
                if cell.data_type == "f":
                    cell.data_type = "s"
                cell.font = BODY_FONT
                cell.alignment = Alignment(vertical="top", wrap_text=True)
        ws.freeze_panes = "A2"

        for ci, header in enumerate(sheet.headers, start=1):
            longest = max(
                [len(header)] + [len(row[ci - 1]) for row in sheet.rows if len(row) >= ci]
            )
            width = min(MAX_COLUMN_WIDTH, max(MIN_COLUMN_WIDTH, longest + 2))
            ws.column_dimensions[get_column_letter(ci)].width = width

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()
