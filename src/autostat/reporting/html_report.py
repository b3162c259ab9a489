"""HTML rendering of a Report through a Jinja2 template.

Tables become ``<table class="data">`` blocks, figures are embedded as
base64 data URIs so the document is a single self-contained file.
"""

import base64
import logging
from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, PackageLoader, select_autoescape

from autostat.reporting.report import Report, format_frame

__all__ = ['HtmlReportRenderer']

logger = logging.getLogger(__name__)

_MIME_TYPES = {
    ".png": "image/png",
    ".svg": "image/svg+xml",
}


class HtmlReportRenderer:
    """Render a Report to a standalone HTML document."""

    template_name = "report.html"

    def __init__(self):
        self.env = Environment(
            loader=PackageLoader("autostat.reporting", "templates"),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def _section_context(self, section) -> dict:
        ctx = {"title": section.title, "kind": section.kind, "caption": section.caption}

        if section.kind == "table":
            ctx["html"] = format_frame(section.content).to_html(
                index=False, classes="data", border=0, escape=True,
            )
        elif section.kind == "figure":
            path = Path(section.content)
            mime = _MIME_TYPES.get(path.suffix.lower())
            if mime is None:
                ctx["kind"] = "text"
                ctx["text"] = f"Figure saved to {path}"
            else:
                ctx["mime"] = mime
                ctx["data"] = base64.b64encode(path.read_bytes()).decode("ascii")
        else:
            ctx["text"] = str(section.content)

        return ctx

    def render(self, report: Report) -> str:
        """Return the HTML text of ``report``."""
        template = self.env.get_template(self.template_name)
        return template.render(
            report=report,
            sections=[self._section_context(s) for s in report.sections],
            generated=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
        )

    def write(self, report: Report, path: Path) -> Path:
        """Render ``report`` and write it to ``path``."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(report), encoding="utf-8")
        logger.info("HTML report written: %s", path)
        return path
