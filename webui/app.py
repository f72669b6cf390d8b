from __future__ import annotations
from pathlib import Path
from typing import Annotated, List, Optional
import logging

from fastapi import Depends, FastAPI, Form, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from expiry import alerts, classify
from food_search import MAX_RESULTS, search_catalog
from index_store import CatalogIndex, INDEX
from inventory_store import (
    InventoryError,
    add_item,
    delete_item,
    list_items,
    update_item,
)
from paths import DB_PATH, SOON_DAYS
from schemas import FoodCount, InventoryItem, ItemCreate, ItemUpdate, SearchResult

logger = logging.getLogger(__name__)

app = FastAPI(title="Matspar")
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

# -----------------------
# FIXED CONFIGURATION
# -----------------------
ITEMS_LIMIT = 100
SUGGESTIONS_LIMIT = 10


# --- Collaborators (overridable in tests) ---
def get_index() -> CatalogIndex:
    return INDEX


def get_db_path() -> Path:
    return DB_PATH


IndexDep = Annotated[CatalogIndex, Depends(get_index)]
DbDep = Annotated[Path, Depends(get_db_path)]


@app.exception_handler(InventoryError)
async def inventory_error(_request: Request, exc: InventoryError):
    logger.error("[db] %s", exc)
    return JSONResponse(status_code=500, content={"error": "database error"})


def _with_status(rows: List[dict], soon_days: int = SOON_DAYS) -> List[dict]:
    out = []
    for r in rows:
        st = classify(r["expiration_date"], soon_days=soon_days)
        out.append({**r, "status": st.status, "days_left": st.days_left})
    return out


# --- Page ---
@app.get("/", response_class=HTMLResponse)
def home(request: Request, index: IndexDep, db_path: DbDep):
    items = _with_status(list_items(limit=ITEMS_LIMIT, db_path=db_path))
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "items": items,
            "cfg": {
                "SOON_DAYS": SOON_DAYS,
                "FOODS": index.count,
                "MAX_RESULTS": MAX_RESULTS,
            },
        },
    )


@app.post("/search/run", response_class=HTMLResponse)
def search_run(
    request: Request,
    index: IndexDep,
    q: Annotated[str, Form()] = "",
):
    results = search_catalog(q, index, limit=SUGGESTIONS_LIMIT)
    return templates.TemplateResponse(
        request,
        "_partials.html",
        {"search_results": results, "q": q},
    )


# --- Catalog API ---
@app.get("/api/foods", response_model=List[SearchResult])
def foods(index: IndexDep, q: Optional[str] = Query(default=None)):
    return search_catalog(q, index)


@app.get("/api/debug/foods-count", response_model=FoodCount)
def foods_count(index: IndexDep):
    return FoodCount(count=index.count)


@app.post("/api/debug/reload", response_model=FoodCount)
def foods_reload(index: IndexDep):
    return FoodCount(count=len(index.rebuild()))


# --- Inventory API ---
@app.post("/api/items")
def create_item(body: ItemCreate, db_path: DbDep):
    item_id = add_item(
        food_id=body.food_id,
        name=body.name,
        expiration_date=body.expiration_date,
        quantity=body.quantity,
        user_id=body.user_id,
        db_path=db_path,
    )
    return {"ok": True, "itemId": item_id}


@app.get("/api/items", response_model=List[InventoryItem])
def get_items(db_path: DbDep, user_id: Optional[str] = Query(None, alias="userId")):
    return _with_status(list_items(user_id, limit=ITEMS_LIMIT, db_path=db_path))


@app.put("/api/items/{item_id}")
def put_item(item_id: int, body: ItemUpdate, db_path: DbDep):
    try:
        n = update_item(
            item_id,
            quantity=body.quantity,
            expiration_date=body.expiration_date,
            db_path=db_path,
        )
    except ValueError as ex:
        return JSONResponse(status_code=400, content={"error": str(ex)})
    return {"ok": True, "updated": n}


@app.delete("/api/items/{item_id}")
def remove_item(item_id: int, db_path: DbDep):
    return {"ok": True, "deleted": delete_item(item_id, db_path=db_path)}


@app.get("/api/alerts", response_model=List[InventoryItem])
def get_alerts(
    db_path: DbDep,
    days: Annotated[int, Query(ge=0)] = SOON_DAYS,
    user_id: Optional[str] = Query(None, alias="userId"),
):
    return alerts(list_items(user_id, limit=ITEMS_LIMIT, db_path=db_path), soon_days=days)
