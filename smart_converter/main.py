# Role: FastAPI app bootstrap. Loads environment config early, registers routers, and exposes health/docs endpoints.

from fastapi import FastAPI

import smart_converter.config
smart_converter.config.load_env()

from smart_converter.api.query import router as query_router
from smart_converter.api.status import router as status_router

app = FastAPI(title="Smart Converter API", version="0.1.0")
app.include_router(query_router)
app.include_router(status_router)


@app.get("/")
def root() -> dict:
    # Role: quick discoverability for clients (where are docs/health).
    return {
        "message": "Smart Converter API is running",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
