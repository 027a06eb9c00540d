# spielplan_api/substitution.py
from __future__ import annotations

import re
from typing import Any, List, Optional, Sequence, Union

from spielplan_api.models import SubstitutionRule

_WS_RE = re.compile(r"\s+")

StrOrList = Union[str, Sequence[str], None]


def normalize_whitespace(value: Any) -> str:
    """
    Collapse whitespace runs to a single space and trim.
    Upstream team names often contain double or trailing spaces.
    """
    if value is None:
        return ""
    return _WS_RE.sub(" ", str(value)).strip()


def _rule_applies(rule: SubstitutionRule, text_norm: str, league_norm: str) -> bool:
    if normalize_whitespace(rule.pattern) != text_norm:
        return False

    scope = normalize_whitespace(rule.league)
    if not scope:
        return True
    # scoped rules never match records without a league
    return bool(league_norm) and scope == league_norm


def resolve(text: str, league: Optional[str], rules: Sequence[SubstitutionRule]) -> str:
    """
    Replace a team name using the first matching rule.

    Matching compares whitespace-normalized values; a rule with a league only
    applies to records of that league. The replacement is returned wrapped in
    <b>..</b>. Without a match the original text is returned untouched.
    """
    if not rules or not text:
        return text

    text_norm = normalize_whitespace(text)
    league_norm = normalize_whitespace(league)

    for rule in rules:
        if _rule_applies(rule, text_norm, league_norm):
            return f"<b>{rule.replacement}</b>"

    return text


def _as_list(value: StrOrList) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return ["" if v is None else str(v) for v in value]


def build_rules(search: StrOrList, replace: StrOrList, league: StrOrList = None) -> List[SubstitutionRule]:
    """
    Combine the host's parallel search/replace/league lists positionally.

    A plain string is accepted for each argument (single-rule configuration).
    Positions without a search pattern are skipped; missing replacement or
    league entries default to "".
    """
    patterns = _as_list(search)
    replacements = _as_list(replace)
    leagues = _as_list(league)

    rules: List[SubstitutionRule] = []
    for i, pattern in enumerate(patterns):
        if not normalize_whitespace(pattern):
            continue
        rules.append(
            SubstitutionRule(
                pattern=pattern,
                replacement=replacements[i] if i < len(replacements) else "",
                league=leagues[i] if i < len(leagues) else "",
            )
        )
    return rules
