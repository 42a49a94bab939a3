from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clmm_planner.api.routers.planning import router as planning_router
from clmm_planner.api.routers.pools import router as pools_router
from clmm_planner.shared.config import get_settings


logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = FastAPI(title="CLMM Planner API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(planning_router)
app.include_router(pools_router)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
