"""Render the projected report as HTML and PDF."""

import html
from datetime import datetime

from tprm_wizard.services.export_projector import ReportDocument, ReportTable


def escape_html(text: str) -> str:
    """Escape HTML special characters to prevent injection."""
    if not text:
        return ""
    return html.escape(str(text))


REPORT_CSS = """
    @page {
        size: A4;
        margin: 40pt;
        @bottom-center {
            content: "Page " counter(page) " of " counter(pages);
            font-size: 8pt;
            color: #666;
        }
    }
    body {
        font-family: 'Helvetica Neue', Arial, sans-serif;
        font-size: 10pt;
        line-height: 1.4;
        color: #1a1a1a;
    }
    .banner h1 {
        font-size: 18pt;
        margin: 0 0 6pt 0;
    }
    .banner .subtitle {
        font-size: 11pt;
        color: #5a5a5a;
        margin-bottom: 12pt;
    }
    .banner .generated {
        font-size: 8pt;
        color: #999;
    }
    h2 {
        font-size: 13pt;
        margin: 22pt 0 10pt 0;
    }
    table {
        width: 100%;
        border-collapse: collapse;
        font-size: 9pt;
    }
    thead {
        display: table-header-group;
    }
    th {
        background: #1e293b;
        color: white;
        padding: 6pt 8pt;
        text-align: left;
        font-weight: 600;
    }
    td {
        padding: 6pt 8pt;
        border-bottom: 1px solid #e2e8f0;
        vertical-align: top;
        white-space: pre-wrap;
    }
    tr:nth-child(even) td {
        background: #f7fafc;
    }
    tr.placeholder td {
        color: #718096;
        font-style: italic;
    }
"""


def _render_table(section: ReportTable) -> str:
    header_cells = "".join(f"<th>{escape_html(h)}</th>" for h in section.headers)
    row_class = ' class="placeholder"' if section.placeholder else ""
    body_rows = "".join(
        f"<tr{row_class}>"
        + "".join(f"<td>{escape_html(value)}</td>" for value in row)
        + "</tr>"
        for row in section.rows
    )
    return f"""
        <section>
            <h2>{escape_html(section.heading)}</h2>
            <table>
                <thead><tr>{header_cells}</tr></thead>
                <tbody>{body_rows}</tbody>
            </table>
        </section>"""


def render_report_html(report: ReportDocument) -> str:
    """
    Build the report as a standalone HTML document.

    Sections follow each other in normal block flow, so every table starts
    right after the end of the previous one whatever its row count.
    """
    sections = "".join(_render_table(section) for section in report.sections)
    generated = datetime.utcnow().strftime("%B %d, %Y")

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{escape_html(report.title)}</title>
    <style>{REPORT_CSS}</style>
</head>
<body>
    <div class="banner">
        <h1>{escape_html(report.title)}</h1>
        <div class="subtitle">{escape_html(report.subtitle)}</div>
        <div class="generated">Generated {generated}</div>
    </div>
    {sections}
</body>
</html>
"""


def render_report_pdf(report: ReportDocument) -> bytes:
    """Render the report to PDF bytes with WeasyPrint."""
    from weasyprint import HTML

    return HTML(string=render_report_html(report)).write_pdf()
