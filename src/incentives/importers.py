"""
Sales-sheet ingestion.

Reads the monthly workshop sales export (.xlsx) and turns each worker row
into an engine ``SalesRecord``. Bad rows are collected, never fatal.
"""
import logging
import zipfile
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from incentives.engine import SalesRecord

logger = logging.getLogger("incentive_desk")

# ---------------------------------------------------------------------------
# Expected headers: (field, header text, fallback column index)
# ---------------------------------------------------------------------------
IMPORT_COLUMNS = [
    ("employee_name", "작업자명", 0),   # A
    ("position", "직급", 1),            # B
    ("category", "인센적용", 2),         # C
    ("net_sales", "순매출액", 3),        # D
    ("profit_margin", "매익율", 10),     # K
]

ONE_DECIMAL = Decimal("0.1")

# Largest values the saved monthly detail columns can hold
MAX_NET_SALES = Decimal("1000000000000")
MAX_PROFIT_MARGIN = Decimal("1000.0")


class SalesImportError(Exception):
    """The upload cannot be used at all (unreadable, empty, no valid rows)."""


@dataclass
class ImportResult:
    records: list = field(default_factory=list)
    errors: int = 0
    error_details: list = field(default_factory=list)
    missing_headers: list = field(default_factory=list)


# =========================================================================
# IMPORT
# =========================================================================

def import_sales_records(file) -> ImportResult:
    """
    Parse an uploaded sales workbook.

    The first worksheet is read; row 1 holds the headers::

        작업자명 | 직급 | 인센적용 | 순매출액 | ... | 매익율

    Rows without a worker name are skipped. Rows whose sales or margin
    cannot be read are reported in ``error_details`` as ``"{row}행: ..."``.
    """
    try:
        wb = openpyxl.load_workbook(file, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
        raise SalesImportError("엑셀 파일을 읽을 수 없습니다.") from exc

    result = ImportResult()
    try:
        ws = wb.worksheets[0]
        rows = ws.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None or all(_is_blank(cell) for cell in header):
            raise SalesImportError("빈 엑셀 파일입니다.")

        columns, result.missing_headers = _resolve_columns(header)
        if result.missing_headers:
            logger.warning(
                "Sales import - headers not found, using column positions: %s",
                ", ".join(result.missing_headers),
            )

        for row_idx, row in enumerate(rows, start=2):
            name = _cell(row, columns["employee_name"])
            name = "" if _is_blank(name) else str(name).strip()
            if not name:
                continue
            try:
                result.records.append(_build_record(name, row, columns))
            except ValueError as exc:
                result.errors += 1
                detail = f"{row_idx}행: {exc}"
                result.error_details.append(detail)
                logger.warning("Sales import - %s", detail)
    finally:
        wb.close()

    if not result.records:
        expected = ", ".join(header_text for _, header_text, _ in IMPORT_COLUMNS)
        raise SalesImportError(
            f"유효한 데이터가 없습니다. 필수 헤더({expected})를 확인해주세요."
        )

    logger.info(
        "Sales import finished: %d record(s), %d error(s).",
        len(result.records), result.errors,
    )
    return result


def normalize_margin(value) -> Decimal:
    """
    Return the profit margin as a percentage rounded to one decimal.

    ``"37.6%"`` and ``37.6`` give 37.6; a bare number in (0, 1] is a
    fraction, so ``0.376`` also gives 37.6.
    """
    if isinstance(value, str):
        text = value.strip().replace(",", "")
        has_percent_sign = text.endswith("%")
        margin = _parse_decimal(text.rstrip("%").strip())
    else:
        has_percent_sign = False
        margin = _parse_decimal(value)

    if margin is None:
        raise ValueError(f"매익율 값이 올바르지 않습니다: {value!r}")
    if not has_percent_sign and 0 < margin <= 1:
        margin *= 100
    if abs(margin) > MAX_PROFIT_MARGIN:
        raise ValueError(f"매익율은 ±{MAX_PROFIT_MARGIN}% 범위여야 합니다: {value!r}")
    return margin.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)


# =========================================================================
# Helpers
# =========================================================================

def _resolve_columns(header):
    labels = ["" if _is_blank(cell) else str(cell).strip() for cell in header]
    columns = {}
    missing = []
    for field_name, header_text, fallback in IMPORT_COLUMNS:
        if header_text in labels:
            columns[field_name] = labels.index(header_text)
        else:
            columns[field_name] = fallback
            missing.append(header_text)
    return columns, missing


def _build_record(name, row, columns) -> SalesRecord:
    net_sales = _parse_decimal(_cell(row, columns["net_sales"]))
    if net_sales is None:
        raise ValueError(f"순매출액 값이 올바르지 않습니다: {_cell(row, columns['net_sales'])!r}")
    if net_sales < 0:
        raise ValueError(f"순매출액은 음수일 수 없습니다: {net_sales}")
    if net_sales > MAX_NET_SALES:
        raise ValueError(f"순매출액이 너무 큽니다: {net_sales}")

    position = _cell(row, columns["position"])
    category = _cell(row, columns["category"])
    return SalesRecord(
        employee_name=name,
        position="" if _is_blank(position) else str(position).strip(),
        category="" if _is_blank(category) else str(category).strip(),
        net_sales=net_sales,
        profit_margin=normalize_margin(_cell(row, columns["profit_margin"])),
    )


def _cell(row, index):
    return row[index] if index < len(row) else None


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_decimal(value):
    if _is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None
