# spielplan_api/formatting.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence
from zoneinfo import ZoneInfo

from spielplan_api.config import DISPLAY_TIMEZONE
from spielplan_api.models import SubstitutionRule
from spielplan_api.substitution import normalize_whitespace, resolve

# Mo=0 .. So=6, matching datetime.weekday()
WEEKDAYS_DE = ("Mo", "Di", "Mi", "Do", "Fr", "Sa", "So")


def _display_zone() -> ZoneInfo:
    return ZoneInfo(DISPLAY_TIMEZONE)


def parse_match_date(raw: Any) -> Optional[datetime]:
    """
    Parse the API's match date into display-local time.

    Accepts ISO-8601 strings (with or without offset, "Z" allowed) and epoch
    milliseconds. Aware values are converted to DISPLAY_TIMEZONE; naive values
    are taken as already local. Returns None for anything unparseable.
    """
    if raw is None or isinstance(raw, bool) or raw == "":
        return None

    if isinstance(raw, (int, float)):
        try:
            dt = datetime.fromtimestamp(raw / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
        return dt.astimezone(_display_zone())

    if not isinstance(raw, str):
        return None

    try:
        dt = datetime.fromisoformat(raw.strip())
        if dt.tzinfo is not None:
            dt = dt.astimezone(_display_zone())
    except (OverflowError, ValueError):
        return None
    return dt


def js_str(value: Any) -> str:
    """Stringify a score operand the way the browser did ("3", not "3.0")."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _operand(record: Mapping[str, Any], key: str) -> Any:
    value = record.get(key)
    return 0 if value is None else value


def _is_zero(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return value == 0 or value == "0"


def _score(record: Mapping[str, Any], won_key: str, lost_key: str) -> str:
    return f"{js_str(_operand(record, won_key))}:{js_str(_operand(record, lost_key))}"


def format_date(record: Mapping[str, Any]) -> str:
    dt = parse_match_date(record.get("date"))
    if dt is None:
        return ""
    return f"{WEEKDAYS_DE[dt.weekday()]}. {dt:%d.%m.%Y}"


def format_time(record: Mapping[str, Any]) -> str:
    dt = parse_match_date(record.get("date"))
    if dt is None:
        return ""
    return f"{dt:%H:%M}"


def format_datetime(record: Mapping[str, Any]) -> str:
    # <wbr> lets narrow columns break between date and time
    dt = parse_match_date(record.get("date"))
    if dt is None:
        return ""
    return f"{dt:%d.%m.%y}<wbr> {dt:%H:%M}&nbsp;Uhr"


def format_matches(record: Mapping[str, Any]) -> str:
    # 0:0 means the fixture has not been played (or is a bye)
    if _is_zero(record.get("matches_won")) and _is_zero(record.get("matches_lost")):
        return ""
    return _score(record, "matches_won", "matches_lost")


def format_teams(record: Mapping[str, Any], rules: Sequence[SubstitutionRule]) -> str:
    league = record.get("league_name")
    home = normalize_whitespace(record.get("team_home") or "")
    away = normalize_whitespace(record.get("team_away") or "")
    return f"{resolve(home, league, rules)}<br />{resolve(away, league, rules)}"


def format_column(record: Any, column_key: str, rules: Sequence[SubstitutionRule] = ()) -> Any:
    """
    Display value of one table cell.

    Never raises: a record missing a field renders as "" or 0 depending on
    the column. Text values of unknown columns still go through the team-name
    substitution; other values are passed through unchanged.
    """
    if not isinstance(record, Mapping):
        record = {}

    if column_key == "date":
        return format_date(record)
    if column_key == "time":
        return format_time(record)
    if column_key == "datetime":
        return format_datetime(record)
    if column_key in ("points", "points/mobile"):
        return _score(record, "points_won", "points_lost")
    if column_key in ("matches", "games", "matches/mobile"):
        return format_matches(record)
    if column_key == "teams":
        return format_teams(record, rules)

    value = record.get(column_key)
    if isinstance(value, str):
        return resolve(value, record.get("league_name"), rules)
    return value if value else ""
