from fastapi import (
    FastAPI,
    Request,
    Query,
    Depends,
    UploadFile,
    File,
    Body,
    Response,
)
from fastapi.responses import JSONResponse, PlainTextResponse
from threading import Lock
from typing import List, Optional
import logging

from mealrota.api.routes import state as state_routes
from mealrota.events.save_observers import start as start_save_observers, get_events, last_saved_at, saved_label
from mealrota.infra.pdf_utils import generate_pdf_for_week
from mealrota.logic.planner.session import PlannerSession
from mealrota.utilities.export import calendar_events, grocery_rows, to_csv, to_ics, week_plan_rows
from mealrota.utilities.import_rows import read_csv
from mealrota.utilities.validators import (
    CookAvailabilityInput,
    DishUpdate,
    RatingInput,
    RecipeLinkInput,
    ReplaceSlotInput,
    SettingsInput,
    ValidationFailure,
    validate_input,
)

# Logging
logger = logging.getLogger("mealrota_app")

# Initialize FastAPI app
app = FastAPI(title="Meal Rotation Planner API")

# Remote state endpoint (GET/PUT /state)
app.include_router(state_routes.router)

_session: Optional[PlannerSession] = None
_session_lock = Lock()


def get_session() -> PlannerSession:
    """Process-wide planner session, restored from storage on first use."""
    global _session
    with _session_lock:
        if _session is None:
            _session = PlannerSession()
            _session.restore()
        return _session


@app.on_event("startup")
def _startup_save_observers():
    """Register the save-status observer when the app starts."""
    start_save_observers()
    logger.info("Save-status observer started")


@app.exception_handler(ValidationFailure)
async def _validation_failure(request: Request, exc: ValidationFailure):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def _plan(session: PlannerSession) -> dict:
    return session.state.to_dict()


# -------------------- API: Plan --------------------
@app.get("/api/plan")
def api_plan(session: PlannerSession = Depends(get_session)):
    return _plan(session)


@app.post("/api/plan/fill")
def api_fill(session: PlannerSession = Depends(get_session)):
    session.fill()
    return _plan(session)


@app.post("/api/plan/slot/replace")
def api_replace_slot(payload: dict = Body(...), session: PlannerSession = Depends(get_session)):
    p = validate_input(ReplaceSlotInput, payload)
    session.replace_slot(p.week_index, p.day_index, p.dish_id, p.slot)
    return _plan(session)


@app.post("/api/plan/slot/rating")
def api_rate_slot(payload: dict = Body(...), session: PlannerSession = Depends(get_session)):
    p = validate_input(RatingInput, payload)
    session.rate_slot(p.week_index, p.day_index, p.rating, p.slot)
    return _plan(session)


@app.post("/api/plan/slot/recipe-link")
def api_recipe_link(payload: dict = Body(...), session: PlannerSession = Depends(get_session)):
    p = validate_input(RecipeLinkInput, payload)
    session.set_recipe_link(p.week_index, p.day_index, p.recipe_url, p.slot)
    return _plan(session)


# -------------------- API: Grocery list --------------------
@app.get("/api/grocery")
def api_grocery(week: int = Query(default=0, ge=0, le=3), cook: Optional[str] = Query(default=None),
                session: PlannerSession = Depends(get_session)):
    items = session.grocery(week, cook or None)
    return {"week": week, "cook": cook, "items": items, "count": len(items)}


# -------------------- API: Dishes --------------------
@app.post("/api/dishes")
def api_add_dish(payload: dict = Body(...), session: PlannerSession = Depends(get_session)):
    session.add_dish(payload)
    return {"dishes": [d.to_dict() for d in session.state.dishes]}


@app.patch("/api/dishes/{dish_id}")
def api_edit_dish(dish_id: str, payload: dict = Body(...), session: PlannerSession = Depends(get_session)):
    p = validate_input(DishUpdate, payload)
    session.edit_dish(dish_id, p.field, p.value)
    return session.state.find_dish(dish_id).to_dict()


@app.post("/api/dishes/{dish_id}/infer")
def api_infer_ingredients(dish_id: str, session: PlannerSession = Depends(get_session)):
    session.infer_ingredients(dish_id)
    return session.state.find_dish(dish_id).to_dict()


@app.delete("/api/dishes/{dish_id}")
def api_remove_dish(dish_id: str, session: PlannerSession = Depends(get_session)):
    session.remove_dish(dish_id)
    return {"dishes": [d.to_dict() for d in session.state.dishes]}


@app.post("/api/dishes/commit")
def api_commit_catalog(session: PlannerSession = Depends(get_session)):
    session.commit_catalog()
    return _plan(session)


@app.post("/api/import/csv")
async def api_import_csv(file: UploadFile = File(...), session: PlannerSession = Depends(get_session)):
    raw = await file.read()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise ValidationFailure("CSV file must be UTF-8 text")
    dishes = read_csv(text)
    session.import_dishes(dishes)
    logger.info("Imported %d dishes from %s", len(dishes), file.filename)
    return {"imported": len(dishes)}


# -------------------- API: Cooks --------------------
@app.post("/api/cooks")
def api_add_cook(payload: dict = Body(default={}), session: PlannerSession = Depends(get_session)):
    session.add_cook(str(payload.get("name", "")))
    return {"cooks": [c.to_dict() for c in session.state.cooks]}


@app.patch("/api/cooks/{code}")
def api_rename_cook(code: str, payload: dict = Body(...), session: PlannerSession = Depends(get_session)):
    session.rename_cook(code, str(payload.get("name", "")))
    return {"cooks": [c.to_dict() for c in session.state.cooks]}


@app.delete("/api/cooks/{code}")
def api_remove_cook(code: str, session: PlannerSession = Depends(get_session)):
    session.remove_cook(code)
    return {"cooks": [c.to_dict() for c in session.state.cooks]}


@app.post("/api/cooks/{code}/availability")
def api_cook_availability(code: str, payload: dict = Body(...), session: PlannerSession = Depends(get_session)):
    p = validate_input(CookAvailabilityInput, payload)
    session.set_cook_availability(code, p.weekday, p.available, p.week_index)
    return _plan(session)


# -------------------- API: Settings & persistence --------------------
@app.post("/api/settings")
def api_settings(payload: dict = Body(...), session: PlannerSession = Depends(get_session)):
    p = validate_input(SettingsInput, payload)
    session.update_settings(**p.model_dump(exclude_none=True))
    return _plan(session)


@app.post("/api/save")
def api_save(session: PlannerSession = Depends(get_session)):
    return {"saved": session.save_now()}


@app.get("/api/save-status")
def api_save_status(session: PlannerSession = Depends(get_session)):
    ts = last_saved_at()
    return {"last_saved_at": ts, "label": saved_label(ts), "remote": session.repository.has_remote}


@app.get("/api/save-events")
def api_save_events(since: Optional[int] = Query(default=None)):
    return get_events(since)


# -------------------- Exports --------------------
@app.get("/export/calendar.ics")
def export_calendar(weeks: Optional[List[int]] = Query(default=None), session: PlannerSession = Depends(get_session)):
    selected = [w for w in (weeks or []) if 0 <= w < len(session.state.grid)]
    ics = to_ics(calendar_events(session.state, selected))
    return Response(content=ics, media_type="text/calendar; charset=utf-8",
                    headers={"Content-Disposition": 'attachment; filename="family-meal-plan.ics"'})


@app.get("/export/week.csv")
def export_week_csv(week: int = Query(default=0, ge=0, le=3), session: PlannerSession = Depends(get_session)):
    return PlainTextResponse(to_csv(week_plan_rows(session.state, week)), media_type="text/csv",
                             headers={"Content-Disposition": f'attachment; filename="week-{week + 1}-plan.csv"'})


@app.get("/export/grocery.csv")
def export_grocery_csv(week: int = Query(default=0, ge=0, le=3), cook: Optional[str] = Query(default=None),
                       session: PlannerSession = Depends(get_session)):
    suffix = f"cook-{cook.lower()}" if cook else "all"
    rows = grocery_rows(session.grocery(week, cook or None))
    return PlainTextResponse(to_csv(rows), media_type="text/csv",
                             headers={"Content-Disposition": f'attachment; filename="week-{week + 1}-grocery-{suffix}.csv"'})


@app.get("/export_pdf")
def export_pdf(week: int = Query(default=0, ge=0, le=3), session: PlannerSession = Depends(get_session)):
    pdf = generate_pdf_for_week(session.state, week)
    return Response(content=pdf, media_type="application/pdf",
                    headers={"Content-Disposition": f'attachment; filename="week-{week + 1}-plan.pdf"'})
