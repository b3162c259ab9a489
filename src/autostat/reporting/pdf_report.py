"""PDF rendering of a Report with reportlab platypus.

Landscape A4 so the wider tables fit; tables get a grey header row and a
thin grid, figures are scaled to the frame width.
"""

import logging
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from autostat.reporting.report import Report, format_frame

__all__ = ['PdfReportRenderer']

logger = logging.getLogger(__name__)

_RASTER_SUFFIXES = {".png", ".jpg", ".jpeg"}

_TABLE_STYLE = TableStyle([
    ('BACKGROUND', (0, 0), (-1, 0), colors.lightgrey),
    ('GRID', (0, 0), (-1, -1), 0.25, colors.black),
    ('FONTSIZE', (0, 0), (-1, -1), 7),
    ('ALIGN', (0, 0), (-1, -1), 'RIGHT'),
    ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
])


class PdfReportRenderer:
    """Render a Report to a PDF file."""

    def __init__(self, max_image_width: float = 18 * cm):
        self.styles = getSampleStyleSheet()
        self.max_image_width = max_image_width

    def _table(self, frame) -> Table:
        text = format_frame(frame)
        rows = [[str(c) for c in text.columns]] + text.values.tolist()
        table = Table(rows, repeatRows=1)
        table.setStyle(_TABLE_STYLE)
        return table

    def _image(self, path: Path):
        if path.suffix.lower() not in _RASTER_SUFFIXES:
            return Paragraph(escape(f"Figure saved to {path}"), self.styles['Italic'])
        width, height = ImageReader(str(path)).getSize()
        scale = min(1.0, self.max_image_width / width)
        return Image(str(path), width=width * scale, height=height * scale)

    def build_story(self, report: Report) -> list:
        """Flowables for every section of ``report``."""
        styles = self.styles
        story = [Paragraph(escape(report.title), styles['Title']), Spacer(1, 12)]

        for section in report.sections:
            story.append(Paragraph(escape(section.title), styles['Heading2']))
            if section.kind == "table":
                story.append(self._table(section.content))
            elif section.kind == "figure":
                story.append(self._image(Path(section.content)))
            elif section.kind == "error":
                lines = escape(str(section.content)).replace("\n", "<br/>")
                story.append(Paragraph(f'<font color="red">{lines}</font>', styles['Normal']))
            else:
                story.append(Paragraph(escape(str(section.content)), styles['Normal']))

            if section.caption:
                story.append(Paragraph(escape(section.caption), styles['Italic']))
            story.append(Spacer(1, 12))

        return story

    def write(self, report: Report, path: Path) -> Path:
        """Render ``report`` to ``path``."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        doc = SimpleDocTemplate(
            str(path),
            pagesize=landscape(A4),
            title=report.title,
            leftMargin=1.5 * cm,
            rightMargin=1.5 * cm,
            topMargin=1.5 * cm,
            bottomMargin=1.5 * cm,
        )
        doc.build(self.build_story(report))
        logger.info("PDF report written: %s", path)
        return path
