from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, TypedDict, Union


# -----------------------------
# Upstream records (as delivered by the league API)
# -----------------------------
class Match(TypedDict, total=False):
    date: str
    team_home: str
    team_away: str
    matches_won: Union[int, str]
    matches_lost: Union[int, str]
    points_won: Union[int, str]
    points_lost: Union[int, str]
    round_name: Optional[str]
    league_name: Optional[str]


class StandingRow(TypedDict, total=False):
    table_rank: int
    team_name: str
    games_won: Union[int, str]
    games_lost: Union[int, str]
    points_won: Union[int, str]
    points_lost: Union[int, str]
    league_name: Optional[str]


# -----------------------------
# Team-name substitution
# -----------------------------
@dataclass(frozen=True)
class SubstitutionRule:
    pattern: str
    replacement: str
    # empty = any league
    league: str = ""


# -----------------------------
# Column schemas
# -----------------------------
@dataclass(frozen=True)
class ColumnSpec:
    key: str
    label: str

    @property
    def css_key(self) -> str:
        """Key as used in class names ("points/mobile" -> "points mobile")."""
        return self.key.replace("/", " ", 1)


TABLE_COLUMNS: Tuple[ColumnSpec, ...] = (
    ColumnSpec("table_rank", "Rang"),
    ColumnSpec("team_name", "Team"),
    ColumnSpec("games", "Spiele"),
    ColumnSpec("matches_relation", "+/-"),
    ColumnSpec("points", "Punkte"),
    ColumnSpec("points/mobile", "Pkt"),
)

SCHEDULE_COLUMNS: Tuple[ColumnSpec, ...] = (
    ColumnSpec("date", "Datum"),
    ColumnSpec("time", "Zeit"),
    ColumnSpec("datetime", "Termin"),
    ColumnSpec("team_home", "Heim"),
    ColumnSpec("team_away", "Gast"),
    ColumnSpec("teams", "Begegnung"),
    ColumnSpec("matches", "Ergebnis"),
    ColumnSpec("matches/mobile", "Erg."),
)

# Extra style classes per column key (stylesheets depend on these)
COLUMN_CLASSES: Dict[str, str] = {
    "teams": "cozy ellipsis minus30ch",
    "datetime": "cozy",
    "team_name": "ellipsis minus24ch",
}

CUP_MATCH_CLASS = "pokal"
