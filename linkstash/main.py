import asyncio
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from .config import APP_NAME, PREFERENCES_FILE
from .links import InvalidURLError, create_link, format_saved_date
from .metadata import resolve_preview
from .platforms import detect_platform, is_valid_url
from .storage import ALL_TAGS, LinkStore, load_preferences, save_preferences
from .tagging import generate_tags

logger = logging.getLogger(__name__)


class LinkIn(BaseModel):
    url: str


class PreferencesUpdate(BaseModel):
    dark_mode: Optional[bool] = None


def get_store(request: Request) -> LinkStore:
    return request.app.state.store


def _find_link(request: Request, id: str):
    link = get_store(request).get(id)
    if not link:
        raise HTTPException(404, "Link not found")
    return link


def create_app(store: Optional[LinkStore] = None, preferences_path: Path = PREFERENCES_FILE) -> FastAPI:
    app = FastAPI(title=APP_NAME)
    app.state.store = store if store is not None else LinkStore.load()
    app.state.preferences_path = Path(preferences_path)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def healthcheck():
        return {"status": "ok", "app": APP_NAME}

    @app.get("/api/links")
    def list_links(request: Request, q: str = "", tag: str = ALL_TAGS):
        results = get_store(request).filter(q, tag)
        return {
            "results": [
                {**l.model_dump(mode="json", by_alias=True), "saved": format_saved_date(l.created_at)}
                for l in results
            ],
            "count": len(results),
        }

    @app.post("/api/links", status_code=201)
    async def add_link(request: Request, body: LinkIn):
        try:
            link = await asyncio.get_event_loop().run_in_executor(None, create_link, body.url)
        except InvalidURLError as exc:
            raise HTTPException(400, exc.message)
        get_store(request).add(link)
        logger.info("Saved %s link %s", link.platform.value, link.url)
        return link

    @app.get("/api/links/{id}")
    def get_link(request: Request, id: str):
        return _find_link(request, id)

    @app.delete("/api/links/{id}")
    async def delete_link(request: Request, id: str):
        if not get_store(request).remove(id):
            raise HTTPException(404, "Link not found")
        return {"ok": True}

    @app.get("/api/tags")
    def list_tags(request: Request):
        return get_store(request).tags()

    @app.get("/api/preview")
    async def preview_link(url: str):
        if not is_valid_url(url):
            raise HTTPException(400, "Please enter a valid URL")
        url = url.strip()
        platform = detect_platform(url)
        resolution = await asyncio.get_event_loop().run_in_executor(
            None, resolve_preview, url, platform
        )
        preview = resolution.preview
        return {
            "preview": preview,
            "tags": generate_tags(preview.title, preview.description, preview.platform),
            "source": resolution.source,
        }

    @app.get("/api/preferences")
    async def get_preferences(request: Request):
        return load_preferences(request.app.state.preferences_path)

    @app.post("/api/preferences")
    async def update_preferences(request: Request, payload: PreferencesUpdate):
        path = request.app.state.preferences_path
        prefs = load_preferences(path)
        if payload.dark_mode is not None:
            prefs.dark_mode = payload.dark_mode
        save_preferences(prefs, path)
        return prefs

    @app.get("/api/export/json")
    def export_json(request: Request):
        return get_store(request).links

    @app.get("/api/export/txt", response_class=PlainTextResponse)
    def export_txt(request: Request):
        return "\n".join(link.url for link in get_store(request))

    return app


app = create_app()
