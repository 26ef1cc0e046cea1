"""Calculate incentives from a sales workbook on the command line."""
from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from incentives.importers import SalesImportError, import_sales_records
from incentives.services import (
    RecordExistsError,
    calculate_batch,
    save_monthly_record,
    summarize_batch,
)


class Command(BaseCommand):
    help = "Read a sales .xlsx file, print each worker's incentive and optionally save the month."

    def add_arguments(self, parser):
        parser.add_argument("path", type=str, help="Path to the sales workbook (.xlsx).")
        parser.add_argument("--year", type=int, default=None)
        parser.add_argument("--month", type=int, default=None)
        parser.add_argument(
            "--save",
            action="store_true",
            help="Persist the result as the monthly record for --year/--month.",
        )
        parser.add_argument(
            "--overwrite",
            action="store_true",
            help="Replace an existing monthly record for the same period.",
        )

    def handle(self, *args, **options):
        path = options["path"]
        if options["save"] and (options["year"] is None or options["month"] is None):
            raise CommandError("--save requires --year and --month.")

        try:
            with open(path, "rb") as fh:
                imported = import_sales_records(fh)
        except FileNotFoundError as exc:
            raise CommandError(f"File not found: {path}") from exc
        except SalesImportError as exc:
            raise CommandError(str(exc)) from exc

        for header in imported.missing_headers:
            self.stdout.write(self.style.WARNING(f"Header not found, positional column used: {header}"))
        for detail in imported.error_details:
            self.stdout.write(self.style.WARNING(detail))

        rows = calculate_batch(imported.records)
        self._print_rows(rows)

        summary = summarize_batch(rows)
        self.stdout.write(
            f"Employees: {summary.employee_count}, "
            f"net sales: {summary.total_net_sales:,.0f}, "
            f"incentive: {summary.total_incentive:,}, "
            f"total salary: {summary.total_salary:,.0f}"
        )

        if not options["save"]:
            return
        try:
            record = save_monthly_record(
                options["year"],
                options["month"],
                imported.records,
                overwrite=options["overwrite"],
            )
        except RecordExistsError as exc:
            raise CommandError(f"{exc} (use --overwrite to replace it)") from exc
        except ValueError as exc:
            raise CommandError(str(exc)) from exc
        self.stdout.write(self.style.SUCCESS(f"Monthly record {record.period_label} saved."))

    def _print_rows(self, rows) -> None:
        self.stdout.write(
            f"{'name':<12}{'position':<10}{'store':<12}{'net sales':>16}"
            f"{'margin':>8}{'lvl':>5}{'mult':>6}{'incentive':>14}  note"
        )
        for row in rows:
            record, result = row.record, row.result
            self.stdout.write(
                f"{record.employee_name:<12}{record.position:<10}{row.store_name:<12}"
                f"{record.net_sales:>16,.0f}{record.profit_margin:>8}"
                f"{result.level:>5}{result.multiplier:>6}{result.incentive_amount:>14,}"
                f"  {result.message or ''}"
            )
