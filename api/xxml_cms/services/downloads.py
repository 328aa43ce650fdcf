"""Downloads catalog: public listings and staff-managed entries."""

import logging
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from xxml_cms.database import atomic
from xxml_cms.errors import NotFound
from xxml_cms.models.download import Download
from xxml_cms.schemas.downloads import DownloadInput
from xxml_cms.services.access import ensure_elevated, parse_id, require_caller, require_elevated
from xxml_cms.services.cache import PathRevalidator
from xxml_cms.services.text import slugify, unique_slug

logger = logging.getLogger(__name__)

DOWNLOADS_PATH = "/downloads"
MANAGE_DENIED_MESSAGE = "Only developers and admins can manage downloads"


class DownloadService:
    def __init__(self, db: AsyncSession, revalidator: PathRevalidator):
        self.db = db
        self.revalidator = revalidator

    # --- Public reads ---

    async def list_downloads(self) -> list[Download]:
        """Featured first, then latest, then by sort order and newest release."""
        result = await self.db.execute(
            select(Download).order_by(
                Download.is_featured.desc(),
                Download.is_latest.desc(),
                Download.sort_order,
                Download.release_date.desc(),
            )
        )
        return list(result.scalars().all())

    async def get_download(self, slug: str) -> Download:
        download = await self.db.scalar(select(Download).where(Download.slug == slug))
        if download is None:
            raise NotFound("Download not found")
        return download

    async def list_latest(self) -> list[Download]:
        result = await self.db.execute(
            select(Download).where(Download.is_latest.is_(True)).order_by(Download.sort_order)
        )
        return list(result.scalars().all())

    async def list_featured(self) -> list[Download]:
        result = await self.db.execute(
            select(Download).where(Download.is_featured.is_(True)).order_by(Download.sort_order)
        )
        return list(result.scalars().all())

    # --- Staff mutations ---

    async def _clear_latest(self, platform: str, keep_id: UUID | None = None) -> None:
        # At most one latest build per platform
        query = update(Download).where(Download.platform == platform, Download.is_latest.is_(True))
        if keep_id is not None:
            query = query.where(Download.id != keep_id)
        await self.db.execute(query.values(is_latest=False))

    async def create_download(self, caller_id: UUID | None, data: DownloadInput) -> Download:
        user = await require_elevated(self.db, caller_id, MANAGE_DENIED_MESSAGE)
        slug = await unique_slug(
            self.db,
            Download.slug,
            slugify(f"{data.name}-{data.version}-{data.platform.lower()}"),
        )

        fields = data.model_dump(exclude_none=True)
        download = Download(slug=slug, **fields)
        async with atomic(self.db):
            if data.is_latest:
                await self._clear_latest(data.platform)
            self.db.add(download)

        logger.info("Download %s created by %s", download.slug, user.username)
        self.revalidator.revalidate(DOWNLOADS_PATH)
        return download

    async def _editable(self, caller_id: UUID | None, download_id: UUID | str) -> Download:
        user = await require_caller(self.db, caller_id)
        download = await self.db.get(Download, parse_id(download_id, "Download ID"))
        if download is None:
            raise NotFound("Download not found")
        ensure_elevated(user, MANAGE_DENIED_MESSAGE)
        return download

    async def update_download(
        self, caller_id: UUID | None, download_id: UUID | str, data: DownloadInput
    ) -> Download:
        """Replace a download's fields; the slug and an unset release date are kept."""
        download = await self._editable(caller_id, download_id)

        async with atomic(self.db):
            if data.is_latest and not download.is_latest:
                await self._clear_latest(data.platform, keep_id=download.id)
            for key, value in data.model_dump(exclude={"release_date"}).items():
                setattr(download, key, value)
            if data.release_date is not None:
                download.release_date = data.release_date

        self.revalidator.revalidate(DOWNLOADS_PATH)
        self.revalidator.revalidate(f"{DOWNLOADS_PATH}/{download.slug}")
        return download

    async def delete_download(self, caller_id: UUID | None, download_id: UUID | str) -> None:
        download = await self._editable(caller_id, download_id)

        async with atomic(self.db):
            await self.db.delete(download)

        logger.info("Download %s deleted", download.slug)
        self.revalidator.revalidate(DOWNLOADS_PATH)
