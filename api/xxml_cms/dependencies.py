"""Service providers for FastAPI endpoints."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from xxml_cms.database import get_db
from xxml_cms.services.admin import AdminService
from xxml_cms.services.cache import PathRevalidator
from xxml_cms.services.docs import DocumentationService
from xxml_cms.services.downloads import DownloadService
from xxml_cms.services.posts import PostService


def get_revalidator(request: Request) -> PathRevalidator:
    return request.app.state.revalidator


def get_post_service(
    db: AsyncSession = Depends(get_db),
    revalidator: PathRevalidator = Depends(get_revalidator),
) -> PostService:
    return PostService(db, revalidator)


def get_docs_service(
    db: AsyncSession = Depends(get_db),
    revalidator: PathRevalidator = Depends(get_revalidator),
) -> DocumentationService:
    return DocumentationService(db, revalidator)


def get_download_service(
    db: AsyncSession = Depends(get_db),
    revalidator: PathRevalidator = Depends(get_revalidator),
) -> DownloadService:
    return DownloadService(db, revalidator)


def get_admin_service(db: AsyncSession = Depends(get_db)) -> AdminService:
    return AdminService(db)
