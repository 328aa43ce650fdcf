"""Downloads router: the release catalog and its staff editor."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from xxml_cms.auth.dependencies import get_caller_id
from xxml_cms.dependencies import get_download_service
from xxml_cms.schemas.common import ActionResult
from xxml_cms.schemas.downloads import DownloadInput, DownloadResponse
from xxml_cms.services.downloads import DownloadService

router = APIRouter(prefix="/api/v1/downloads", tags=["Downloads"])


@router.get(
    "",
    response_model=ActionResult[list[DownloadResponse]],
    status_code=status.HTTP_200_OK,
)
async def list_downloads(
    service: DownloadService = Depends(get_download_service),
) -> ActionResult[list[DownloadResponse]]:
    """All downloads: featured first, then latest builds."""
    downloads = await service.list_downloads()
    return ActionResult.success([DownloadResponse.model_validate(d) for d in downloads])


@router.get(
    "/latest",
    response_model=ActionResult[list[DownloadResponse]],
    status_code=status.HTTP_200_OK,
)
async def list_latest(
    service: DownloadService = Depends(get_download_service),
) -> ActionResult[list[DownloadResponse]]:
    downloads = await service.list_latest()
    return ActionResult.success([DownloadResponse.model_validate(d) for d in downloads])


@router.get(
    "/featured",
    response_model=ActionResult[list[DownloadResponse]],
    status_code=status.HTTP_200_OK,
)
async def list_featured(
    service: DownloadService = Depends(get_download_service),
) -> ActionResult[list[DownloadResponse]]:
    downloads = await service.list_featured()
    return ActionResult.success([DownloadResponse.model_validate(d) for d in downloads])


@router.get(
    "/{slug}",
    response_model=ActionResult[DownloadResponse],
    status_code=status.HTTP_200_OK,
)
async def get_download(
    slug: str,
    service: DownloadService = Depends(get_download_service),
) -> ActionResult[DownloadResponse]:
    download = await service.get_download(slug)
    return ActionResult.success(DownloadResponse.model_validate(download))


@router.post(
    "",
    response_model=ActionResult[DownloadResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_download(
    data: DownloadInput,
    service: DownloadService = Depends(get_download_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[DownloadResponse]:
    """
    Add a download.

    Requires a developer, moderator or admin role. Marking it latest
    clears the flag on other builds for the same platform.
    """
    download = await service.create_download(caller_id, data)
    return ActionResult.success(DownloadResponse.model_validate(download))


@router.put(
    "/{download_id}",
    response_model=ActionResult[DownloadResponse],
    status_code=status.HTTP_200_OK,
)
async def update_download(
    download_id: str,
    data: DownloadInput,
    service: DownloadService = Depends(get_download_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[DownloadResponse]:
    download = await service.update_download(caller_id, download_id, data)
    return ActionResult.success(DownloadResponse.model_validate(download))


@router.delete(
    "/{download_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_download(
    download_id: str,
    service: DownloadService = Depends(get_download_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> None:
    await service.delete_download(caller_id, download_id)
