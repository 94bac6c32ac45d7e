"""Shared state storage: one JSON document that every device reads and overwrites.

Endpoints:
  GET  /state -> 200 with the stored JSON object, or null
  PUT  /state -> 204; 400 when the body is not a JSON object
  anything else -> 405
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from mealrota.infra.paths import STATE_BLOB_FILE
from mealrota.utilities.constants import CACHE_CONTROL_NO_STORE

router = APIRouter()
logger = logging.getLogger(__name__)

BLOB_FILE = str(STATE_BLOB_FILE)
# Prevent CDN/browser caching so every device sees updates immediately
NO_STORE_HEADERS = {"Cache-Control": CACHE_CONTROL_NO_STORE}


def _read_blob():
    if not os.path.exists(BLOB_FILE):
        return None
    try:
        with open(BLOB_FILE, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Stored state unreadable, serving null: %s", e)
        return None


def _atomic_write(document: dict):
    os.makedirs(os.path.dirname(BLOB_FILE), exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(BLOB_FILE), prefix=".state_", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(document, tmp, ensure_ascii=False)
        shutil.move(tmp_path, BLOB_FILE)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


@router.get("/state")
def get_state():
    return JSONResponse(content=_read_blob(), headers=NO_STORE_HEADERS)


@router.put("/state")
async def put_state(request: Request):
    raw = await request.body()
    try:
        body = json.loads(raw or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return PlainTextResponse("Invalid JSON", status_code=400)
    if not isinstance(body, dict):
        return PlainTextResponse("Invalid JSON", status_code=400)
    try:
        _atomic_write(body)
    except OSError as e:
        logger.error("Failed to store state in %s: %s", Path(BLOB_FILE).name, e)
        return PlainTextResponse("Storage unavailable", status_code=500)
    return Response(status_code=204, headers=NO_STORE_HEADERS)


@router.api_route("/state", methods=["POST", "PATCH", "DELETE"])
def state_method_not_allowed():
    return PlainTextResponse("Method Not Allowed", status_code=405)
