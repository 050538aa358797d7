from __future__ import annotations

from fastapi import Depends, Request

from src.application.errors import AuthError, ServiceUnavailable
from src.application.herd_store import HerdStore
from src.application.interfaces.image_store import ImageStore
from src.config.settings import Settings
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.reports.pdf_generator import PDFGenerator


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_owner_id(request: Request, settings: Settings = Depends(get_app_settings)) -> str:
    owner_id = (request.headers.get(settings.owner_header) or "").strip()
    if not owner_id:
        raise AuthError(f"Missing {settings.owner_header} header")
    return owner_id


async def get_herd_store(request: Request, owner_id: str = Depends(get_owner_id)) -> HerdStore:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    store = HerdStore(lambda: SQLAlchemyUnitOfWork(session_factory), owner_id)
    await store.load()
    return store


def get_image_store(request: Request) -> ImageStore:
    images = getattr(request.app.state, "image_store", None)
    if images is None:
        raise ServiceUnavailable("Image storage is not configured")
    return images


def get_report_renderer(request: Request) -> PDFGenerator:
    renderer = getattr(request.app.state, "report_renderer", None)
    if renderer is None:
        raise RuntimeError("Report renderer not configured")
    return renderer
