"""Report assembly and rendering.

- report: Report / ReportSection model and build_report()
- html_report: Jinja2 HTML renderer
- pdf_report: reportlab PDF renderer
"""

from pathlib import Path
from typing import Dict, Iterable

from autostat.reporting.report import Report, ReportSection, build_report
from autostat.reporting.html_report import HtmlReportRenderer
from autostat.reporting.pdf_report import PdfReportRenderer

__all__ = [
    "Report",
    "ReportSection",
    "build_report",
    "HtmlReportRenderer",
    "PdfReportRenderer",
    "RENDERERS",
    "render_reports",
]

RENDERERS = {
    "html": HtmlReportRenderer,
    "pdf": PdfReportRenderer,
}


def render_reports(report: Report, output_dir: Path, basename: str,
                   formats: Iterable[str]) -> Dict[str, Path]:
    """Write ``report`` once per format.

    Returns
    -------
    dict
        Format -> written path, e.g. ``{"html": .../cars_report.html}``.

    Raises
    ------
    ValueError
        If a format has no renderer.
    """
    formats = list(dict.fromkeys(formats))
    unknown = [f for f in formats if f not in RENDERERS]
    if unknown:
        raise ValueError(f"Unknown report format(s) {unknown}; expected {sorted(RENDERERS)}")

    paths = {}
    for fmt in formats:
        path = Path(output_dir) / f"{basename}.{fmt}"
        paths[fmt] = RENDERERS[fmt]().write(report, path)
    return paths
