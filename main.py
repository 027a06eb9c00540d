# main.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from spielplan_api.classifier import unwrap_payload
from spielplan_api.config import LOG_LEVEL, validate_config
from spielplan_api.html_view import view_html
from spielplan_api.models import SubstitutionRule
from spielplan_api.source_client import SourceFetchError, fetch_dataset_cached
from spielplan_api.substitution import build_rules
from spielplan_api.tables import render_dataset

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

# -----------------------
# App
# -----------------------
app = FastAPI(
    title="Tabelle & Spielplan API",
    version="0.1.0",
    description="Renders league schedules and standings as HTML tables with per-league team-name substitution",
)


@app.on_event("startup")
def on_startup():
    validate_config()


@app.get("/health")
def health_check():
    return {"status": "ok", "time": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")}


# -----------------------
# Request models
# -----------------------
class RuleIn(BaseModel):
    pattern: str = Field(..., description="Team name as delivered by the league API")
    replacement: str = Field("", description="Text shown instead (may contain markup)")
    league: str = Field("", description="Only apply within this league (empty = any)")


class RenderRequest(BaseModel):
    dataset: Any = Field(None, description='League JSON, either bare or wrapped as {"data": ...}')
    rules: List[RuleIn] = Field(default_factory=list)

    # Block attribute form: parallel lists, combined positionally
    search: List[str] = Field(default_factory=list)
    replace: List[str] = Field(default_factory=list)
    liga: List[str] = Field(default_factory=list)


def _rules_of(req: RenderRequest) -> List[SubstitutionRule]:
    rules = [SubstitutionRule(pattern=r.pattern, replacement=r.replacement, league=r.league) for r in req.rules]
    rules.extend(build_rules(req.search, req.replace, req.liga))
    return rules


# -----------------------
# Render endpoints (caller supplies the data)
# -----------------------
@app.post("/api/render")
def render(req: RenderRequest):
    view = render_dataset(unwrap_payload(req.dataset), _rules_of(req))
    return view.to_dict()


@app.post("/api/render/html", response_class=HTMLResponse)
def render_html(req: RenderRequest):
    view = render_dataset(unwrap_payload(req.dataset), _rules_of(req))
    return HTMLResponse(view_html(view))


# -----------------------
# Proxy-backed tables (fetch + cache + render)
# -----------------------
@app.get("/api/tables", response_class=HTMLResponse)
def tables(
    url: str = "",
    search: Optional[List[str]] = Query(None),
    replace: Optional[List[str]] = Query(None),
    liga: Optional[List[str]] = Query(None),
):
    if not url.strip():
        raise HTTPException(status_code=400, detail="No URL provided for Tabelle & Spielplan block.")

    try:
        payload, stale, error = fetch_dataset_cached(url)
    except SourceFetchError as e:
        logger.error("Unable to fetch league data for %s: %s", url, e)
        raise HTTPException(status_code=502, detail=f"Fehler beim Laden der Daten: {str(e)}")

    rules = build_rules(search, replace, liga)
    view = render_dataset(unwrap_payload(payload), rules)

    headers = {"X-Data-Stale": "1" if stale else "0"}
    if stale and error:
        headers["X-Data-Warning"] = "Live fetch failed, serving cached data"
    return HTMLResponse(view_html(view), headers=headers)


@app.get("/api/tables/data")
def tables_data(
    url: str = "",
    search: Optional[List[str]] = Query(None),
    replace: Optional[List[str]] = Query(None),
    liga: Optional[List[str]] = Query(None),
):
    if not url.strip():
        raise HTTPException(status_code=400, detail="No URL provided for Tabelle & Spielplan block.")

    try:
        payload, stale, error = fetch_dataset_cached(url)
    except SourceFetchError as e:
        raise HTTPException(status_code=502, detail=f"Unable to fetch league data: {str(e)}")

    view = render_dataset(unwrap_payload(payload), build_rules(search, replace, liga))
    out = {"source": "cache" if stale else "proxy", "stale": stale, "data": view.to_dict()}
    if stale:
        out["warning"] = "Live fetch failed, serving cached data"
        out["error"] = error
    return out
