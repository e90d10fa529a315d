"""
Export of person lists to CSV, Excel and PDF byte streams.

All writers take the already filtered/sorted list and return a rewound
``BytesIO`` ready to be streamed as a download.
"""
from __future__ import annotations

import csv
import io
from typing import Iterable, List

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from contact_manager.db.schemas import PersonResponse
from contact_manager.utils.dates import format_day_month_year

CSV_HEADERS = [
    "PersonName",
    "Email",
    "DateOfBirth",
    "Age",
    "Gender",
    "Country",
    "Address",
    "ReceiveNewsLetters",
]

EXCEL_SHEET_NAME = "PersonsSheet"
EXCEL_HEADERS = [
    "Person Name",
    "Email",
    "Date of Birth",
    "Age",
    "Gender",
    "Country",
    "Address",
    "Receive News Letters",
]
_HEADER_FILL = PatternFill(fill_type="solid", start_color="D3D3D3", end_color="D3D3D3")

CSV_MEDIA_TYPE = "application/octet-stream"
EXCEL_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"

PDF_TITLE = "Persons"
PDF_MARGIN = 20 * mm
_PDF_HEADER_BACKGROUND = colors.HexColor("#D3D3D3")


def _row(person: PersonResponse) -> List:
    return [
        person.person_name,
        person.email,
        format_day_month_year(person.date_of_birth, separator="-"),
        person.age,
        person.gender,
        person.country_name,
        person.address,
        person.receive_news_letters,
    ]


def persons_to_csv(persons: Iterable[PersonResponse]) -> io.BytesIO:
    buffer = io.BytesIO()
    text = io.TextIOWrapper(buffer, encoding="utf-8", newline="")
    writer = csv.writer(text)
    writer.writerow(CSV_HEADERS)
    for person in persons:
        writer.writerow(["" if value is None else value for value in _row(person)])
    text.flush()
    text.detach()
    buffer.seek(0)
    return buffer


def _autofit_columns(worksheet) -> None:
    for column_cells in worksheet.columns:
        width = max((len(str(cell.value)) for cell in column_cells if cell.value is not None), default=0)
        letter = get_column_letter(column_cells[0].column)
        worksheet.column_dimensions[letter].width = width + 2


def persons_to_excel(persons: Iterable[PersonResponse]) -> io.BytesIO:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = EXCEL_SHEET_NAME

    worksheet.append(EXCEL_HEADERS)
    for cell in worksheet[1]:
        cell.font = Font(bold=True)
        cell.fill = _HEADER_FILL

    for person in persons:
        worksheet.append(_row(person))

    _autofit_columns(worksheet)

    buffer = io.BytesIO()
    workbook.save(buffer)
    buffer.seek(0)
    return buffer


def persons_to_pdf(persons: Iterable[PersonResponse]) -> io.BytesIO:
    """Render the persons as a table on landscape A4 pages with 20mm margins.

    Page streams are written uncompressed.
    """
    buffer = io.BytesIO()
    document = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=PDF_MARGIN,
        rightMargin=PDF_MARGIN,
        topMargin=PDF_MARGIN,
        bottomMargin=PDF_MARGIN,
        title=PDF_TITLE,
        pageCompression=0,
    )

    rows = [EXCEL_HEADERS]
    for person in persons:
        rows.append(["" if value is None else str(value) for value in _row(person)])

    table = Table(rows, repeatRows=1)
    table.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("BACKGROUND", (0, 0), (-1, 0), _PDF_HEADER_BACKGROUND),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]))

    styles = getSampleStyleSheet()
    document.build([Paragraph(PDF_TITLE, styles["Heading1"]), Spacer(1, 8), table])
    buffer.seek(0)
    return buffer
