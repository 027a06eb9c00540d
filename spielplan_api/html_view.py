# spielplan_api/html_view.py
# Presentation stage: cell values go in as markup, labels/titles/messages are escaped.
from __future__ import annotations

from html import escape
from typing import Any, List

from spielplan_api.formatting import js_str
from spielplan_api.tables import RenderedTable, RenderedView, Row


def _cell_markup(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (int, float)):
        return js_str(value)
    return str(value)


def _row_html(row: Row) -> str:
    tds: List[str] = []
    for cell in row.cells:
        classes = " ".join([cell.css_class, *row.annotations]).strip()
        tds.append(f'<td class="{escape(classes)}">{_cell_markup(cell.value)}</td>')
    return "<tr>" + "".join(tds) + "</tr>"


def table_html(table: RenderedTable) -> str:
    ths = "".join(
        f'<th class="{escape(h.css_class)}">{escape(h.label)}</th>' for h in table.header
    )
    body = "".join(_row_html(r) for r in table.rows)
    return f"<table><thead><tr>{ths}</tr></thead><tbody>{body}</tbody></table>"


def view_html(view: RenderedView) -> str:
    parts: List[str] = []
    for i, section in enumerate(view.sections):
        if i > 0:
            parts.append("<br><br>")
        if section.title:
            parts.append(f"<h4>{escape(section.title)}</h4>")
        if section.table is not None:
            parts.append(table_html(section.table))
        elif section.message:
            parts.append(escape(section.message))
    return "<div>" + "".join(parts) + "</div>"
