from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Ensure the repo root .env is loaded regardless of launch directory.
load_dotenv(Path(__file__).resolve().parents[2] / ".env")

from app import config  # noqa: E402
from app.dependencies import SESSIONS  # noqa: E402
from app.routes import register_routes  # noqa: E402

logging.basicConfig(level=config.log_level())
logger = logging.getLogger("neonlove")

app = FastAPI(title="Neon Love Test API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

register_routes(app)


@app.on_event("shutdown")
def _shutdown() -> None:
    # Cancel outstanding generation calls and timers.
    for session in SESSIONS.values():
        session.cancel_pending()
    SESSIONS.clear()
