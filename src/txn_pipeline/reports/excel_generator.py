"""
Excel report generator for pipeline boards and account ledgers.
"""

from datetime import datetime
from pathlib import Path
import logging

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.worksheet.worksheet import Worksheet

from ..classification.status import AuditBadge, audit_badge
from ..config import PipelineConfig
from ..ledger import ledger_total
from ..models.views import LedgerRow, PipelineColumn
from ..pipelines.columns import Pipeline
from ..utils.exceptions import ReportGenerationError

logger = logging.getLogger(__name__)

# Style definitions
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
CREDIT_FILL = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
UNRECONCILED_FILL = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)

BOARD_HEADERS = ["ID", "Title", "Amount", "Currency", "Date", "Credit", "Audit"]
LEDGER_HEADERS = ["Date", "Description", "Transaction ID", "Amount", "Running Balance"]


class ExcelReportGenerator:
    """Writes pipeline boards and ledgers to Excel workbooks."""

    def __init__(self, config: PipelineConfig):
        """
        Initialize the report generator.

        Args:
            config: Application configuration
        """
        self.config = config
        self.excel_config = config.output.excel
        self.sheet_config = config.output.sheets

    def board_filename(self, pipeline: Pipeline) -> str:
        """Default board file name from the configured template."""
        return _render(self.excel_config.board_filename_template, pipeline=pipeline.value)

    def ledger_filename(self, account_name: str) -> str:
        """Default ledger file name from the configured template."""
        account = "_".join(account_name.lower().split())
        return _render(self.excel_config.ledger_filename_template, account=account)

    def generate_board_report(
        self,
        pipeline: Pipeline,
        columns: list[PipelineColumn],
        output_path: Path,
    ) -> Path:
        """
        Write a pipeline board, one section per column.

        Args:
            pipeline: Pipeline the columns belong to
            columns: Classified columns
            output_path: Path for output file

        Returns:
            Path to generated report

        Raises:
            ReportGenerationError: If the workbook cannot be written
        """
        logger.info(f"Generating board report: {output_path}")

        wb = self._new_workbook()
        board_config = self.sheet_config.board
        if board_config.enabled:
            ws = wb.create_sheet(board_config.name)
            self._write_board(ws, pipeline, columns)

        return self._save(wb, output_path)

    def generate_ledger_report(
        self,
        account_name: str,
        account_type: str,
        rows: list[LedgerRow],
        output_path: Path,
    ) -> Path:
        """
        Write an account ledger.

        Args:
            account_name: Chart-of-accounts name
            account_type: Account type label
            rows: Ledger rows, oldest first
            output_path: Path for output file

        Returns:
            Path to generated report

        Raises:
            ReportGenerationError: If the workbook cannot be written
        """
        logger.info(f"Generating ledger report: {output_path}")

        wb = self._new_workbook()
        ledger_config = self.sheet_config.ledger
        if ledger_config.enabled:
            ws = wb.create_sheet(ledger_config.name)
            self._write_ledger(ws, account_name, account_type, rows)

        return self._save(wb, output_path)

    def _new_workbook(self) -> Workbook:
        wb = Workbook()
        # Remove default sheet
        if wb.active:
            wb.remove(wb.active)
        return wb

    def _save(self, wb: Workbook, output_path: Path) -> Path:
        if not wb.worksheets:
            raise ReportGenerationError("All report sheets are disabled in configuration")
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(output_path)
        except OSError as e:
            raise ReportGenerationError(f"Failed to write report {output_path}: {e}") from e
        logger.info(f"Report saved: {output_path}")
        return output_path

    def _write_header_row(self, ws: Worksheet, row: int, headers: list[str]) -> None:
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=row, column=col, value=header)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.border = THIN_BORDER

    def _write_board(
        self, ws: Worksheet, pipeline: Pipeline, columns: list[PipelineColumn]
    ) -> None:
        ws["A1"] = f"{pipeline.value.capitalize()} pipeline"
        ws["A1"].font = Font(size=16, bold=True)
        ws["A2"] = f"Generated At: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"

        row = 4
        for column in columns:
            ws.cell(row=row, column=1, value=f"{column.title} ({column.total_count})").font = Font(
                bold=True
            )
            row += 1
            self._write_header_row(ws, row, BOARD_HEADERS)
            row += 1

            for stub in column.transactions:
                tx = stub.original_transaction
                badge = audit_badge(tx)
                row_data = [
                    stub.id,
                    stub.title,
                    float(tx.summary.total_amount),
                    tx.summary.currency,
                    tx.transaction_datetime.strftime("%Y-%m-%d"),
                    "credit" if stub.is_credit else "",
                    badge.value if badge else "",
                ]
                for col, value in enumerate(row_data, start=1):
                    cell = ws.cell(row=row, column=col, value=value)
                    cell.border = THIN_BORDER
                    if badge is AuditBadge.UNRECONCILED:
                        cell.fill = UNRECONCILED_FILL
                    elif stub.is_credit:
                        cell.fill = CREDIT_FILL
                row += 1

            if column.has_more:
                ws.cell(
                    row=row,
                    column=1,
                    value=f"... and {column.total_count - len(column.transactions)} more",
                )
                row += 1
            row += 1

        self._auto_fit_columns(ws)

    def _write_ledger(
        self,
        ws: Worksheet,
        account_name: str,
        account_type: str,
        rows: list[LedgerRow],
    ) -> None:
        ws["A1"] = f"{account_name} ({account_type})"
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:E1")

        self._write_header_row(ws, 3, LEDGER_HEADERS)

        for row_num, entry in enumerate(rows, start=4):
            row_data = [
                entry.date.strftime("%Y-%m-%d"),
                entry.description,
                entry.transaction.id,
                float(entry.signed_amount),
                float(entry.running_balance),
            ]
            for col, value in enumerate(row_data, start=1):
                cell = ws.cell(row=row_num, column=col, value=value)
                cell.border = THIN_BORDER
                if col >= 4:
                    cell.number_format = "#,##0.00"
                    cell.alignment = Alignment(horizontal="right")

        total_row = len(rows) + 4
        ws.cell(row=total_row, column=4, value="Total").font = Font(bold=True)
        total_cell = ws.cell(row=total_row, column=5, value=float(ledger_total(rows)))
        total_cell.font = Font(bold=True)
        total_cell.number_format = "#,##0.00"

        self._auto_fit_columns(ws)

    def _auto_fit_columns(self, ws: Worksheet) -> None:
        """Auto-fit column widths based on content."""
        widths: dict[str, int] = {}
        for row in ws.iter_rows():
            for cell in row:
                # Merged cells have no column letter to size
                letter = getattr(cell, "column_letter", None)
                if letter is None or cell.value is None:
                    continue
                widths[letter] = max(widths.get(letter, 0), len(str(cell.value)))

        for letter, max_length in widths.items():
            ws.column_dimensions[letter].width = min(max_length + 2, 50)


def _render(template: str, **fields: str) -> str:
    now = datetime.now()
    try:
        return template.format(
            date=now.strftime("%Y%m%d"), time=now.strftime("%H%M%S"), **fields
        )
    except (KeyError, IndexError) as e:
        raise ReportGenerationError(f"Invalid filename template '{template}': {e}") from e
