# spielplan_api/classifier.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Literal, Mapping, Optional, Union

from spielplan_api.models import Match, StandingRow

FULL_SCHEDULE = "full-schedule"
COMBINED = "combined"


@dataclass(frozen=True)
class FullSchedule:
    """All rounds/categories of a league at once, no standings."""
    records: List[Match]
    mode: Literal["full-schedule"] = FULL_SCHEDULE


@dataclass(frozen=True)
class Combined:
    """
    Excerpt of matches plus the standings table.
    A source is None when the payload did not carry it in the expected
    shape; the renderer shows a placeholder for it.
    """
    schedule: Optional[List[Match]]
    standings: Optional[List[StandingRow]]
    mode: Literal["combined"] = COMBINED


ClassifiedDataset = Union[FullSchedule, Combined]


def _present(value: Any) -> bool:
    # upstream uses null/""/0/false for "missing"; an empty list still counts as present
    if value is None or isinstance(value, (bool, int, float, str)):
        return bool(value)
    return True


def _records_of(value: Any) -> List[Match]:
    """One flatten level: lists are spliced in, single records appended."""
    if isinstance(value, list):
        # non-object items are dropped here; only standings rows are kept verbatim
        return [r for r in value if isinstance(r, Mapping)]
    if isinstance(value, Mapping):
        return [value]
    return []


def unwrap_payload(payload: Any) -> Any:
    """The proxy wraps the league data as {"data": ...}."""
    if isinstance(payload, Mapping) and "data" in payload:
        return payload.get("data")
    return payload


def is_full_schedule(dataset: Any) -> bool:
    return (
        isinstance(dataset, Mapping)
        and not _present(dataset.get("meetings_excerpt"))
        and not _present(dataset.get("table"))
    )


def _flatten_rounds(dataset: Mapping[str, Any]) -> List[Match]:
    records: List[Match] = []
    for matches in dataset.values():
        records.extend(_records_of(matches))
    return records


def _meeting_records(dataset: Mapping[str, Any]) -> Optional[List[Match]]:
    excerpt = dataset.get("meetings_excerpt")
    if not isinstance(excerpt, Mapping):
        return None

    meetings = excerpt.get("meetings")
    if not isinstance(meetings, list):
        return None

    records: List[Match] = []
    for meeting in meetings:
        if isinstance(meeting, Mapping):
            entries = meeting.values()
        elif isinstance(meeting, list):
            entries = meeting
        else:
            continue
        for entry in entries:
            records.extend(_records_of(entry))
    return records


def _standings_records(dataset: Mapping[str, Any]) -> Optional[List[StandingRow]]:
    table = dataset.get("table")
    if not isinstance(table, list):
        return None
    return list(table)


def classify(dataset: Any) -> ClassifiedDataset:
    """
    Decide how a league payload is rendered.

    A dataset without `meetings_excerpt` and without `table` is a full
    schedule keyed by round. Anything else (including None or a non-object)
    is the combined shape, with missing sources left as None.
    """
    if is_full_schedule(dataset):
        return FullSchedule(records=_flatten_rounds(dataset))

    if not isinstance(dataset, Mapping):
        return Combined(schedule=None, standings=None)

    return Combined(
        schedule=_meeting_records(dataset),
        standings=_standings_records(dataset),
    )
