import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ontoview.config import settings
from ontoview.routers.ontology import router as ontology_router
from ontoview.routers.snapshot import router as snapshot_router
from ontoview.routers.views import router as views_router
from ontoview.services.registry import get_render_cache

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s  %(name)-32s  %(levelname)-7s  %(message)s",
)

app = FastAPI(title="Ontology View API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ontology_router)
app.include_router(views_router)
app.include_router(snapshot_router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "render_cache": get_render_cache().stats()}


def run() -> None:
    uvicorn.run("ontoview.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
