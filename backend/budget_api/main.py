"""
Budget Allocator backend: FastAPI app for hierarchical budget editing.

=== ROLE IN THE SYSTEM ===
The frontend renders the budget table; this API owns the tree. Every user
action arrives as (session, line item id, raw input, mode), is applied by the
engine's allocator, and the response carries the freshly aggregated tree,
flattened display rows and the grand total.

=== ROUTES ===
  GET    /api/health
  POST   /api/sessions                                    → create (sample budget by default)
  POST   /api/sessions/upload                             → create from a .csv/.xlsx table
  GET    /api/sessions/{id}                               → session metadata
  DELETE /api/sessions/{id}                               → drop session
  GET    /api/sessions/{id}/budget                        → aggregated tree + rows + grand total
  PUT    /api/sessions/{id}/budget/inputs/{item_id}       → store pending raw input
  POST   /api/sessions/{id}/budget/items/{item_id}/percent
  POST   /api/sessions/{id}/budget/items/{item_id}/value
  GET    /api/sessions/{id}/budget/export                 → .xlsx download

Sessions live in process memory only (see budget_api.state).
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import budget_api.state as state
from budget_api.config import CORS_ORIGIN_REGEX, cors_origins
from budget_api.routers.budget import router as budget_router
from budget_api.routers.sessions import router as sessions_router

_log = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    _log.info("Budget allocator backend starting")
    yield
    _log.info("Budget allocator backend stopping; dropping %d sessions", len(state._SESSIONS))
    state.reset()


app = FastAPI(lifespan=_lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_origin_regex=CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(sessions_router)
app.include_router(budget_router)
