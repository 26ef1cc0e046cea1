"""Excel export of saved monthly records."""
import logging
from io import BytesIO

from django.http import HttpResponse

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from incentives.services import get_monthly_details

logger = logging.getLogger("incentive_desk")

EXPORT_HEADERS = [
    "작업자명",
    "직급",
    "점포",
    "인센적용",
    "순매출액",
    "매익율",
    "매출이익",
    "달성 구간",
    "배수",
    "인센티브",
    "결과",
]


def export_monthly_record_to_excel(record) -> HttpResponse:
    """
    Export the details of a ``MonthlyRecord`` to an ``.xlsx`` download,
    followed by a totals row.
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = f"{record.year}-{record.month:02d}"

    header_font = Font(bold=True, color="FFFFFF", size=11)
    header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")

    for col_num, header in enumerate(EXPORT_HEADERS, 1):
        cell = ws.cell(row=1, column=col_num, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center", vertical="center")

    row_num = 1
    for row_num, detail in enumerate(get_monthly_details(record), start=2):
        ws.cell(row=row_num, column=1, value=detail.employee_name)
        ws.cell(row=row_num, column=2, value=detail.position)
        ws.cell(row=row_num, column=3, value=detail.store_name)
        ws.cell(row=row_num, column=4, value=detail.category)
        ws.cell(row=row_num, column=5, value=float(detail.net_sales))
        ws.cell(row=row_num, column=6, value=float(detail.profit_margin))
        ws.cell(row=row_num, column=7, value=round(float(detail.gross_profit)))
        ws.cell(row=row_num, column=8, value=detail.level)
        ws.cell(row=row_num, column=9, value=float(detail.multiplier))
        ws.cell(row=row_num, column=10, value=detail.incentive_amount)
        ws.cell(row=row_num, column=11, value=detail.get_outcome_display())

    # ----- Totals -----
    totals_row = row_num + 1
    ws.cell(row=totals_row, column=1, value="합계").font = Font(bold=True)
    ws.cell(row=totals_row, column=5, value=float(record.total_revenue)).font = Font(bold=True)
    ws.cell(row=totals_row, column=7, value=record.total_profit).font = Font(bold=True)
    ws.cell(row=totals_row, column=10, value=record.total_incentive).font = Font(bold=True)

    # ----- Auto-size columns -----
    for col_num in range(1, len(EXPORT_HEADERS) + 1):
        col_letter = get_column_letter(col_num)
        max_length = len(str(EXPORT_HEADERS[col_num - 1]))
        for row in ws.iter_rows(min_row=2, min_col=col_num, max_col=col_num):
            for cell in row:
                if cell.value:
                    max_length = max(max_length, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_length + 4, 50)

    buffer = BytesIO()
    wb.save(buffer)
    buffer.seek(0)

    filename = f"incentive_{record.year}_{record.month:02d}.xlsx"
    response = HttpResponse(
        buffer.getvalue(),
        content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    logger.info("Monthly record %s exported.", record.period_label)
    return response
