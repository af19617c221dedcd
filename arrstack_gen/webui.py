"""FastAPI preview API: render compose files from posted settings."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from .generator import build_services
from .models import AppCategory, GlobalSettings
from .registry import APPS, get_all_apps
from .service_builder import BuildOutcome
from .yaml_out import serialize_services

logger = logging.getLogger(__name__)

app = FastAPI(title="arrstack compose preview")


class AppSummary(BaseModel):
    id: str
    name: str
    description: str
    category: AppCategory
    default_port: int
    image: str
    depends_on: List[str]


class SelectionOutcome(BaseModel):
    id: str
    outcome: BuildOutcome


class ServicesPreview(BaseModel):
    services: Dict[str, dict]
    outcomes: List[SelectionOutcome]


def _summarize(app_id: str) -> AppSummary:
    app_def = APPS[app_id]
    return AppSummary(
        id=app_def.id,
        name=app_def.name,
        description=app_def.description,
        category=app_def.category,
        default_port=app_def.default_port,
        image=app_def.image,
        depends_on=list(app_def.depends_on),
    )


@app.get("/api/apps")
async def list_apps(category: Optional[AppCategory] = None) -> List[AppSummary]:
    apps = get_all_apps()
    if category is not None:
        apps = [item for item in apps if item.category == category]
    return [_summarize(item.id) for item in apps]


@app.get("/api/apps/{app_id}")
async def get_app_summary(app_id: str) -> AppSummary:
    if app_id not in APPS:
        raise HTTPException(status_code=404, detail=f"Unknown app: {app_id}")
    return _summarize(app_id)


@app.post("/api/services")
async def preview_services(settings: GlobalSettings) -> ServicesPreview:
    services, results = build_services(settings)
    return ServicesPreview(
        services={name: svc.model_dump(exclude_none=True) for name, svc in services.items()},
        outcomes=[SelectionOutcome(id=result.app_id, outcome=result.outcome) for result in results],
    )


@app.post("/api/compose", response_class=PlainTextResponse)
async def preview_compose(settings: GlobalSettings) -> PlainTextResponse:
    services, _ = build_services(settings)
    return PlainTextResponse(serialize_services(services), media_type="text/yaml")


def run(host: str = "127.0.0.1", port: int = 8001) -> None:
    """Launch the preview API using uvicorn."""
    logger.info("Starting compose preview API on %s:%s", host, port)
    uvicorn.run("arrstack_gen.webui:app", host=host, port=port, reload=False)


if __name__ == "__main__":  # pragma: no cover
    run()
