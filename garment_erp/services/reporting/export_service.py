"""
Export Service

Renders tabular reports to CSV, Excel and PDF in memory so the API can
stream them straight back to the client.
"""

import io
import csv
from typing import Any, Dict, List, Optional, Sequence, Tuple
from datetime import date, datetime
from decimal import Decimal
import logging

# PDF generation
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle

# Excel generation
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill

from garment_erp.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

# (key, header) pairs
Columns = Sequence[Tuple[str, str]]

MEDIA_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "pdf": "application/pdf",
}


def _cell_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (date, datetime)):
        return value.strftime('%d/%m/%Y')
    if hasattr(value, "value"):
        return value.value
    return value


class ExportService:
    """Service for exporting reports to various formats"""

    def export(
        self,
        title: str,
        columns: Columns,
        rows: List[Dict[str, Any]],
        format: str,
        summary: Optional[Dict[str, Any]] = None,
    ) -> bytes:
        """
        Export rows to the requested format

        Args:
            title: report heading
            columns: (key, header) pairs in output order
            rows: one mapping per output row
            format: csv, xlsx or pdf
            summary: optional label -> value lines printed under the title

        Returns:
            File contents
        """
        try:
            if format == "pdf":
                content = self._export_to_pdf(title, columns, rows, summary or {})
            elif format == "xlsx":
                content = self._export_to_excel(title, columns, rows, summary or {})
            elif format == "csv":
                content = self._export_to_csv(columns, rows)
            else:
                raise ValidationError(f"Unsupported export format: {format}")
        except ValidationError:
            raise
        except Exception as e:
            logger.error(f"Error exporting {title} to {format}: {str(e)}")
            raise

        logger.info(f"{title} exported to {format}: {len(rows)} rows")
        return content

    def _export_to_csv(self, columns: Columns, rows: List[Dict[str, Any]]) -> bytes:
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow([header for _, header in columns])
        for row in rows:
            writer.writerow([_cell_value(row.get(key)) for key, _ in columns])
        return buffer.getvalue().encode('utf-8')

    def _export_to_excel(
        self,
        title: str,
        columns: Columns,
        rows: List[Dict[str, Any]],
        summary: Dict[str, Any],
    ) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = title[:31]

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        ws['A1'] = title
        ws['A1'].font = Font(bold=True, size=16)
        ws['A2'] = f"Generated: {datetime.now().strftime('%d/%m/%Y %H:%M:%S')}"

        row = 3
        for label, value in summary.items():
            ws.cell(row=row, column=1, value=label).font = Font(bold=True)
            ws.cell(row=row, column=2, value=_cell_value(value))
            row += 1
        row += 1

        for col, (_, header) in enumerate(columns, 1):
            cell = ws.cell(row=row, column=col, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.border = border
            cell.alignment = Alignment(horizontal='center')
        row += 1

        for record in rows:
            for col, (key, _) in enumerate(columns, 1):
                value = _cell_value(record.get(key))
                cell = ws.cell(row=row, column=col, value=value)
                if isinstance(value, float):
                    cell.number_format = '#,##0.00'
                cell.border = border
            row += 1

        # Auto-adjust column widths
        for column in ws.columns:
            max_length = max(len(str(cell.value or "")) for cell in column)
            ws.column_dimensions[column[0].column_letter].width = min(max_length + 2, 50)

        buffer = io.BytesIO()
        wb.save(buffer)
        return buffer.getvalue()

    def _export_to_pdf(
        self,
        title: str,
        columns: Columns,
        rows: List[Dict[str, Any]],
        summary: Dict[str, Any],
    ) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=landscape(A4),
            rightMargin=24,
            leftMargin=24,
            topMargin=36,
            bottomMargin=18
        )

        styles = getSampleStyleSheet()
        title_style = ParagraphStyle(
            'ReportTitle',
            parent=styles['Heading1'],
            fontSize=16,
            spaceAfter=12,
            alignment=1  # Center alignment
        )

        story = [Paragraph(title, title_style)]

        metadata = [['Generated:', datetime.now().strftime('%d/%m/%Y %H:%M:%S')]]
        metadata.extend([f'{label}:', str(_cell_value(value))] for label, value in summary.items())
        metadata_table = Table(metadata)
        metadata_table.setStyle(TableStyle([
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
        ]))
        story.append(metadata_table)
        story.append(Spacer(1, 12))

        table_data = [[header for _, header in columns]]
        for record in rows:
            table_data.append([str(_cell_value(record.get(key))) for key, _ in columns])

        table = Table(table_data, repeatRows=1)
        table.setStyle(TableStyle([
            # Header styling
            ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, 0), 8),

            # Data styling
            ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 1), (-1, -1), 7),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.beige, colors.white]),

            ('GRID', (0, 0), (-1, -1), 0.5, colors.black)
        ]))
        story.append(table)

        doc.build(story)
        return buffer.getvalue()
