"""
FastAPI backend for the habit tracker frontend.

Route handlers are defined here; shared utilities live in routes/helpers.py
and every number served comes from the analytics package.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from datetime import date
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from constants import DASHBOARD_TREND_WINDOW, RECENT_WINDOW, REPORT_PERIODS
from routes.helpers import (
    LOG_COLUMNS, PROFILE_COLUMNS,
    _conn_str, _execute, _fetch_one,
    _load_entries, _within_days, _dimension_or_none, _log_values,
    _statistics_payload, _recent_averages,
)
from analytics.correlation import find_correlations
from analytics.insights import generate_insights
from analytics.statistics import build_trend, recent_entries
from analytics.streaks import calculate_streak
from analytics.wellness import calculate_wellness_score, wellness_breakdown
from pipeline.migrations import ensure_startup_schema, schema_audit
from pipeline.report_builder import build_wellness_report, report_filename
from visualizations import HabitChartBuilder, figure_payload

log = logging.getLogger("api")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if _conn_str():
        try:
            ensure_startup_schema()
        except Exception as e:
            log.warning("Startup schema bootstrap failed: %s", e)
    else:
        log.warning("POSTGRES_CONNECTION_STRING not set; skipping schema bootstrap")
    yield


# ─── App setup ─────────────────────────────────────────────

app = FastAPI(title="Habit Tracker API", version="1.0.0", lifespan=lifespan)

_origin_env = os.getenv("FRONTEND_ORIGINS", "")
_origins = [o.strip() for o in _origin_env.split(",") if o.strip()] or [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


class DailyLogIn(BaseModel):
    log_date: date
    study_hours: float = Field(default=0, ge=0, le=24)
    sleep_hours: float = Field(default=0, ge=0, le=24)
    meal_count: int = Field(default=0, ge=0)
    meal_quality: int = Field(default=3, ge=1, le=5)
    screen_time: float = Field(default=0, ge=0, le=24)
    water_intake: float = Field(default=0, ge=0)
    mood: int = Field(default=5, ge=1, le=10)
    exercise_minutes: int = Field(default=0, ge=0)
    exercise_type: str = ""
    daily_note: str = ""


class ProfileIn(BaseModel):
    name: str = Field(min_length=1)
    age: Optional[int] = Field(default=None, ge=0, le=150)
    gender: str = ""
    goals: str = ""
    notes: str = ""


def _metric_or_400(metric: str):
    dim = _dimension_or_none(metric)
    if dim is None:
        raise HTTPException(status_code=400, detail=f"Unknown metric: {metric}")
    return dim


# ─── Service ───────────────────────────────────────────────

@app.get("/")
def root() -> Dict[str, Any]:
    return {"service": "habit-tracker-api", "status": "ok"}


@app.get("/health-check")
def health_check() -> JSONResponse:
    try:
        _fetch_one("SELECT 1 AS ok")
        return JSONResponse({"status": "Online", "message": "Online"})
    except Exception as e:
        return JSONResponse(
            status_code=200,
            content={
                "status": "Waking up",
                "message": f"Service starting or DB unavailable: {e}",
            },
        )


# ─── Daily logs ────────────────────────────────────────────

@app.get("/api/v1/daily-logs")
def list_daily_logs() -> Dict[str, Any]:
    try:
        items = [e.to_dict() for e in _load_entries()]
        return {"data": items, "count": len(items)}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/v1/daily-logs")
def create_daily_log(body: DailyLogIn) -> Dict[str, Any]:
    try:
        row = _execute(
            f"""
            INSERT INTO daily_logs ({", ".join(LOG_COLUMNS)})
            VALUES ({", ".join(["%s"] * len(LOG_COLUMNS))})
            RETURNING id
            """,
            _log_values(body.model_dump()),
        )
        log.info("Created daily log for %s", body.log_date)
        return {"id": row["id"]}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.put("/api/v1/daily-logs/{log_id}")
def update_daily_log(log_id: int, body: DailyLogIn) -> Dict[str, Any]:
    try:
        row = _execute(
            f"""
            UPDATE daily_logs
            SET {", ".join(f"{c}=%s" for c in LOG_COLUMNS)}, updated_at=CURRENT_TIMESTAMP
            WHERE id=%s
            RETURNING id
            """,
            _log_values(body.model_dump()) + (log_id,),
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not row:
        raise HTTPException(status_code=404, detail="Daily log not found")
    return {"message": "Updated successfully", "id": log_id}


@app.delete("/api/v1/daily-logs/{log_id}")
def delete_daily_log(log_id: int) -> Dict[str, Any]:
    try:
        row = _execute("DELETE FROM daily_logs WHERE id=%s RETURNING id", (log_id,))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not row:
        raise HTTPException(status_code=404, detail="Daily log not found")
    return {"message": "Deleted successfully", "id": log_id}


# ─── Profile ───────────────────────────────────────────────

@app.get("/api/v1/profile")
def get_profile() -> Dict[str, Any]:
    try:
        row = _fetch_one(f"SELECT id, {', '.join(PROFILE_COLUMNS)} FROM user_profile ORDER BY id LIMIT 1")
        return {"profile": row}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/v1/profile")
def create_profile(body: ProfileIn) -> Dict[str, Any]:
    try:
        existing = _fetch_one("SELECT COUNT(*) AS count FROM user_profile")
        if existing and existing.get("count", 0) > 0:
            raise HTTPException(status_code=400, detail="Profile already exists")
        payload = body.model_dump()
        row = _execute(
            f"""
            INSERT INTO user_profile ({", ".join(PROFILE_COLUMNS)})
            VALUES ({", ".join(["%s"] * len(PROFILE_COLUMNS))})
            RETURNING id
            """,
            tuple(payload[c] for c in PROFILE_COLUMNS),
        )
        return {"id": row["id"]}
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.put("/api/v1/profile/{profile_id}")
def update_profile(profile_id: int, body: ProfileIn) -> Dict[str, Any]:
    payload = body.model_dump()
    try:
        row = _execute(
            f"""
            UPDATE user_profile
            SET {", ".join(f"{c}=%s" for c in PROFILE_COLUMNS)}
            WHERE id=%s
            RETURNING id
            """,
            tuple(payload[c] for c in PROFILE_COLUMNS) + (profile_id,),
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not row:
        raise HTTPException(status_code=404, detail="Profile not found")
    return {"message": "Profile updated successfully", "id": profile_id}


@app.delete("/api/v1/profile/{profile_id}")
def delete_profile(profile_id: int) -> Dict[str, Any]:
    try:
        row = _execute("DELETE FROM user_profile WHERE id=%s RETURNING id", (profile_id,))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not row:
        raise HTTPException(status_code=404, detail="Profile not found")
    return {"message": "Profile deleted successfully", "id": profile_id}


# ─── Analytics ─────────────────────────────────────────────

@app.get("/api/v1/analytics/statistics")
def analytics_statistics(days: Optional[int] = Query(default=None, ge=1, le=3650)) -> Dict[str, Any]:
    """Mean/median/variance/std dev per dimension, optionally windowed."""
    try:
        entries = _load_entries()
        if days:
            entries = _within_days(entries, days)
        return {"statistics": _statistics_payload(entries), "n": len(entries), "days": days}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/v1/analytics/correlations")
def analytics_correlations() -> Dict[str, Any]:
    try:
        entries = _load_entries()
        correlations = [c.to_dict() for c in find_correlations(entries)]
        return {"correlations": correlations, "n": len(entries)}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/v1/analytics/trends")
def analytics_trends(
    metric: str = Query(default="mood"),
    window: int = Query(default=DASHBOARD_TREND_WINDOW, ge=1, le=90),
) -> Dict[str, Any]:
    dim = _metric_or_400(metric)
    try:
        points = [p.to_dict() for p in build_trend(_load_entries(), dim, window)]
        return {"metric": dim.key, "label": dim.label, "window": window, "data": points}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/v1/insights/latest")
def insights_latest() -> Dict[str, Any]:
    try:
        entries = _load_entries()
        insights = [i.to_dict() for i in generate_insights(entries)]
        return {
            "insights": insights,
            "wellness_score": calculate_wellness_score(entries),
            "wellness_breakdown": wellness_breakdown(entries),
            "streak": calculate_streak(entries),
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/v1/dashboard")
def dashboard() -> Dict[str, Any]:
    try:
        entries = _load_entries()
        if not entries:
            return {"empty": True, "n": 0}
        mood = _dimension_or_none("mood")
        return {
            "empty": False,
            "n": len(entries),
            "averages": _recent_averages(entries),
            "streak": calculate_streak(entries),
            "wellness_score": calculate_wellness_score(entries),
            "mood_trend": [p.to_dict() for p in build_trend(entries, mood, DASHBOARD_TREND_WINDOW)],
            "correlations": [
                c.to_dict() for c in find_correlations(recent_entries(entries, RECENT_WINDOW))
            ],
            "insights": [i.to_dict() for i in generate_insights(entries)],
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


# ─── Reports ───────────────────────────────────────────────

@app.get("/api/v1/reports/{period}")
def export_report(period: str) -> PlainTextResponse:
    if period not in REPORT_PERIODS:
        raise HTTPException(status_code=400, detail=f"Unknown report period: {period}")
    try:
        entries = _load_entries()
        today = date.today()
        period_entries = _within_days(entries, REPORT_PERIODS[period][2], today=today)
        if not period_entries:
            raise HTTPException(status_code=404, detail="No data available for the selected period")
        text = build_wellness_report(period, period_entries, entries, generated=today)
        filename = report_filename(period, today)
        log.info("Exported %s report (%d entries)", period, len(period_entries))
        return PlainTextResponse(
            text,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


# ─── Charts ────────────────────────────────────────────────

@app.get("/api/v1/charts/trend")
def chart_trend(
    metric: str = Query(default="mood"),
    window: int = Query(default=DASHBOARD_TREND_WINDOW, ge=1, le=90),
) -> Dict[str, Any]:
    dim = _metric_or_400(metric)
    try:
        fig = HabitChartBuilder().create_trend_chart(_load_entries(), dim, window)
        return figure_payload(fig)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/v1/charts/correlations")
def chart_correlations(kind: str = Query(default="bars")) -> Dict[str, Any]:
    if kind not in ("bars", "heatmap"):
        raise HTTPException(status_code=400, detail=f"Unknown chart kind: {kind}")
    try:
        entries = _load_entries()
        builder = HabitChartBuilder()
        if kind == "heatmap":
            fig = builder.create_correlation_heatmap(entries)
        else:
            fig = builder.create_correlation_bars(find_correlations(entries))
        return figure_payload(fig)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


# ─── Admin ─────────────────────────────────────────────────

@app.get("/api/v1/admin/migration-audit")
def migration_audit() -> Dict[str, Any]:
    try:
        return schema_audit(_conn_str())
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
