# spielplan_api/tables.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from spielplan_api.classifier import COMBINED, FullSchedule, classify
from spielplan_api.formatting import format_column
from spielplan_api.models import (
    COLUMN_CLASSES,
    CUP_MATCH_CLASS,
    SCHEDULE_COLUMNS,
    TABLE_COLUMNS,
    ColumnSpec,
    SubstitutionRule,
)

NO_GAME_DATA = "No game data available."
NO_TABLE_DATA = "No table data available."

SCHEDULE_TITLE = "Spielplan"
TABLE_TITLE = "Tabelle"


@dataclass(frozen=True)
class HeaderCell:
    key: str
    label: str
    css_class: str


@dataclass(frozen=True)
class Cell:
    key: str
    value: Any
    css_class: str


@dataclass
class Row:
    cells: List[Cell]
    annotations: List[str] = field(default_factory=list)


@dataclass
class RenderedTable:
    header: List[HeaderCell]
    rows: List[Row]

    def labels(self) -> List[str]:
        return [h.label for h in self.header]

    def values(self) -> List[List[Any]]:
        return [[c.value for c in r.cells] for r in self.rows]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "header": self.labels(),
            "columns": [h.css_class for h in self.header],
            "rows": self.values(),
            "annotations": [list(r.annotations) for r in self.rows],
        }


@dataclass
class Section:
    """One titled block of output: a table, or a placeholder message."""
    title: Optional[str]
    table: Optional[RenderedTable] = None
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "table": self.table.to_dict() if self.table is not None else None,
            "message": self.message,
        }


@dataclass
class RenderedView:
    mode: str
    sections: List[Section]

    def to_dict(self) -> Dict[str, Any]:
        return {"mode": self.mode, "sections": [s.to_dict() for s in self.sections]}


def cell_class(col: ColumnSpec) -> str:
    return f"{COLUMN_CLASSES.get(col.key, '')} {col.css_key}".strip()


def render_table(
    schema: Sequence[ColumnSpec],
    records: Iterable[Any],
    rules: Sequence[SubstitutionRule] = (),
    *,
    mark_cup_matches: bool = False,
) -> RenderedTable:
    """
    Format every record against the column schema.

    Records keep their input order; nothing is sorted, filtered or merged.
    With mark_cup_matches, rows of records that carry a round name are
    annotated as cup matches.
    """
    header = [HeaderCell(key=c.key, label=c.label, css_class=c.css_key) for c in schema]

    rows: List[Row] = []
    for record in records:
        cells = [
            Cell(key=c.key, value=format_column(record, c.key, rules), css_class=cell_class(c))
            for c in schema
        ]
        annotations: List[str] = []
        if mark_cup_matches and isinstance(record, Mapping) and record.get("round_name"):
            annotations.append(CUP_MATCH_CLASS)
        rows.append(Row(cells=cells, annotations=annotations))

    return RenderedTable(header=header, rows=rows)


def _section(title: str, schema: Sequence[ColumnSpec], records: Optional[List[Any]],
             rules: Sequence[SubstitutionRule], placeholder: str) -> Section:
    if records is None:
        return Section(title=title, message=placeholder)
    return Section(title=title, table=render_table(schema, records, rules))


def render_dataset(dataset: Any, rules: Sequence[SubstitutionRule] = ()) -> RenderedView:
    """
    Classify a league dataset and render its tables.

    Full schedules become one untitled table with cup-match rows marked;
    the combined shape becomes a "Spielplan" and a "Tabelle" section, each
    falling back to a placeholder message when its source is missing.
    """
    classified = classify(dataset)

    if isinstance(classified, FullSchedule):
        table = render_table(SCHEDULE_COLUMNS, classified.records, rules, mark_cup_matches=True)
        return RenderedView(mode=classified.mode, sections=[Section(title=None, table=table)])

    return RenderedView(
        mode=COMBINED,
        sections=[
            _section(SCHEDULE_TITLE, SCHEDULE_COLUMNS, classified.schedule, rules, NO_GAME_DATA),
            _section(TABLE_TITLE, TABLE_COLUMNS, classified.standings, rules, NO_TABLE_DATA),
        ],
    )
