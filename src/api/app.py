"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import debt, performance
from src.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="Portfolio Analytics",
    description="Mortgage amortization and rental property return metrics",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(debt.router)
app.include_router(performance.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
