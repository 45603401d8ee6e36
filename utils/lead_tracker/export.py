# utils/lead_tracker/export.py
"""
CSV & Excel Export for Lead Tracker

Creates:
- Flat CSV (one row per generator x week 1..52 of a year)
- Formatted Excel report with summary, monthly and weekly sheets

Uses pandas for the CSV (standard quoting) and openpyxl for formatting.
"""

import logging
from datetime import datetime
from io import BytesIO
from typing import Optional

import pandas as pd

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter

from .aggregation import AggregationEngine
from .calendar_utils import make_week_key
from .constants import EXCEL_STYLES, EXPORT_COLUMNS, WEEKS_PER_YEAR
from .models import AppData
from .store import MetricsStore

logger = logging.getLogger(__name__)


class LeadTrackerExport:
    """
    Export generator for a tracker year.

    Usage:
        exporter = LeadTrackerExport()
        csv_text = exporter.to_csv(app_data, 2024)
        excel_bytes = exporter.create_report(app_data, 2024)

        st.download_button(
            label="Download CSV",
            data=csv_text,
            file_name=exporter.file_name(2024, "csv"),
            mime="text/csv"
        )
    """

    def __init__(self):
        """Initialize with default styles."""
        self.wb = None
        self._init_styles()

    def _init_styles(self):
        """Initialize reusable styles."""
        self.header_fill = PatternFill(
            start_color=EXCEL_STYLES['header_fill_color'],
            end_color=EXCEL_STYLES['header_fill_color'],
            fill_type='solid'
        )

        self.header_font = Font(
            bold=True,
            color=EXCEL_STYLES['header_font_color'],
            size=11
        )

        self.title_font = Font(bold=True, size=16)
        self.subtitle_font = Font(bold=True, size=12)

        thin_border = Side(style='thin', color='000000')
        self.cell_border = Border(
            left=thin_border,
            right=thin_border,
            top=thin_border,
            bottom=thin_border
        )

        self.center_align = Alignment(horizontal='center', vertical='center')

    @staticmethod
    def file_name(year: int, extension: str) -> str:
        return f"lead_tracker_{year}.{extension}"

    # =========================================================================
    # CSV
    # =========================================================================

    @staticmethod
    def build_export_frame(data: AppData, year: int) -> pd.DataFrame:
        """
        Flat table of every generator x week 1..52 for a year.

        Weeks without a record export as zeros. Nothing is written back
        into the data.
        """
        store = MetricsStore(data)
        rows = []

        for generator in data.generators:
            for week in range(1, WEEKS_PER_YEAR + 1):
                record = store.peek(generator.id, make_week_key(year, week))
                rows.append([
                    generator.name,
                    week,
                    year,
                    record.hours_worked,
                    record.leads_booked,
                    record.appointments_sat,
                    record.gross_sales,
                    record.sales_per_hour,
                ])

        return pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    def to_csv(self, data: AppData, year: int) -> str:
        """
        CSV text of build_export_frame().

        Names containing a comma or quote are quoted, with inner quotes
        doubled.
        """
        df = self.build_export_frame(data, year)
        logger.info(f"📤 CSV export: {len(df)} rows for {year}")
        return df.to_csv(index=False, lineterminator="\n")

    # =========================================================================
    # EXCEL
    # =========================================================================

    def create_report(
        self,
        data: AppData,
        year: int,
        engine: Optional[AggregationEngine] = None
    ) -> BytesIO:
        """
        Create formatted Excel report with multiple sheets.

        Args:
            data: Tracker document
            year: Report year
            engine: Aggregation engine over the same data (optional)

        Returns:
            BytesIO containing Excel file
        """
        engine = engine or AggregationEngine(MetricsStore(data))
        self.wb = Workbook()

        self._create_summary_sheet(engine, year)
        self._write_table(
            self.wb.create_sheet("Monthly"),
            self._rename(engine.monthly_breakdown(year), {'month': 'Month'})
        )
        self._write_table(
            self.wb.create_sheet("Weekly"),
            self.build_export_frame(data, year)
        )

        output = BytesIO()
        self.wb.save(output)
        output.seek(0)

        logger.info(f"Excel report for {year} created successfully")
        return output

    @staticmethod
    def _rename(df: pd.DataFrame, extra: dict) -> pd.DataFrame:
        names = {
            'generator': 'Generator',
            'hours': 'Hours Worked',
            'leads': 'Leads Booked',
            'appointments': 'Appointments Sat',
            'sales': 'Gross Sales',
            'sph': 'SPH',
        }
        names.update(extra)
        return df.rename(columns=names)

    def _create_summary_sheet(self, engine: AggregationEngine, year: int):
        """Cover sheet with combined and per-generator yearly totals."""
        ws = self.wb.active
        ws.title = "Summary"

        row = 1
        ws.cell(row=row, column=1, value=f"Lead Generator Report {year}")
        ws.cell(row=row, column=1).font = self.title_font
        ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=4)
        row += 2

        ws.cell(row=row, column=1, value="Generated:")
        ws.cell(row=row, column=2, value=datetime.now().strftime('%Y-%m-%d %H:%M'))
        row += 2

        ws.cell(row=row, column=1, value="Combined Totals")
        ws.cell(row=row, column=1).font = self.subtitle_font
        row += 1

        combined = engine.yearly_totals(year)
        for label, value in [
            ("Total Hours Worked", combined.hours),
            ("Total Leads Booked", combined.leads),
            ("Total Appointments Sat", combined.appointments),
            ("Total Gross Sales", combined.sales),
            ("Avg Hours Per Sale (SPH)", combined.sph),
        ]:
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value)
            row += 1

        row += 1
        ws.cell(row=row, column=1, value="Individual Performance")
        ws.cell(row=row, column=1).font = self.subtitle_font
        row += 1

        summary = engine.generator_summary(year).drop(columns=['generator_id'])
        self._write_table(ws, self._rename(summary, {}), start_row=row)

    def _write_table(self, ws, df: pd.DataFrame, start_row: int = 1):
        """Write a DataFrame with a styled header row."""
        for col_idx, column in enumerate(df.columns, start=1):
            cell = ws.cell(row=start_row, column=col_idx, value=column)
            cell.fill = self.header_fill
            cell.font = self.header_font
            cell.alignment = self.center_align
            cell.border = self.cell_border

        for row_offset, values in enumerate(df.itertuples(index=False), start=1):
            for col_idx, value in enumerate(values, start=1):
                if hasattr(value, 'item'):
                    value = value.item()
                cell = ws.cell(row=start_row + row_offset, column=col_idx, value=value)
                cell.border = self.cell_border

                column = df.columns[col_idx - 1]
                if column == 'Gross Sales':
                    cell.number_format = EXCEL_STYLES['currency_format']
                elif column in ('SPH', 'Hours Worked'):
                    cell.number_format = EXCEL_STYLES['decimal_format']

        for col_idx, column in enumerate(df.columns, start=1):
            ws.column_dimensions[get_column_letter(col_idx)].width = max(12, len(str(column)) + 4)
