"""Documentation router: standard library reference and its editor."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from xxml_cms.auth.dependencies import get_caller_id
from xxml_cms.dependencies import get_docs_service
from xxml_cms.schemas.common import ActionResult
from xxml_cms.schemas.docs import (
    ClassDetailResponse,
    ClassInput,
    ClassSummary,
    ClassUpdate,
    ModuleInfo,
    ModuleInput,
    ModuleResponse,
    ModuleSummary,
    ModuleUpdate,
    ReorderRequest,
)
from xxml_cms.services.docs import DocumentationService

router = APIRouter(prefix="/api/v1/docs", tags=["Documentation"])


# --- Reads ---


@router.get(
    "/modules",
    response_model=ActionResult[list[ModuleSummary]],
    status_code=status.HTTP_200_OK,
)
async def list_modules(
    service: DocumentationService = Depends(get_docs_service),
) -> ActionResult[list[ModuleSummary]]:
    """All modules in display order with their class summaries."""
    modules = await service.list_modules()
    return ActionResult.success([ModuleSummary.model_validate(m) for m in modules])


@router.get(
    "/modules/{slug}",
    response_model=ActionResult[ModuleResponse],
    status_code=status.HTTP_200_OK,
)
async def get_module(
    slug: str,
    service: DocumentationService = Depends(get_docs_service),
) -> ActionResult[ModuleResponse]:
    module = await service.get_module(slug)
    return ActionResult.success(ModuleResponse.model_validate(module))


@router.get(
    "/modules/{slug}/classes",
    response_model=ActionResult[list[ClassSummary]],
    status_code=status.HTTP_200_OK,
)
async def list_classes(
    slug: str,
    service: DocumentationService = Depends(get_docs_service),
) -> ActionResult[list[ClassSummary]]:
    classes = await service.list_classes(slug)
    return ActionResult.success([ClassSummary.model_validate(c) for c in classes])


@router.get(
    "/modules/{slug}/classes/{class_slug}",
    response_model=ActionResult[ClassDetailResponse],
    status_code=status.HTTP_200_OK,
)
async def get_class(
    slug: str,
    class_slug: str,
    service: DocumentationService = Depends(get_docs_service),
) -> ActionResult[ClassDetailResponse]:
    doc_class = await service.get_class(slug, class_slug)
    return ActionResult.success(ClassDetailResponse.model_validate(doc_class))


# --- Modules ---


@router.post(
    "/modules",
    response_model=ActionResult[ModuleInfo],
    status_code=status.HTTP_201_CREATED,
)
async def create_module(
    data: ModuleInput,
    service: DocumentationService = Depends(get_docs_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[ModuleInfo]:
    """Create a module. Requires a developer, moderator or admin role."""
    module = await service.create_module(caller_id, data)
    return ActionResult.success(ModuleInfo.model_validate(module))


@router.post(
    "/modules/reorder",
    response_model=ActionResult[list[ModuleSummary]],
    status_code=status.HTTP_200_OK,
)
async def reorder_modules(
    data: ReorderRequest,
    service: DocumentationService = Depends(get_docs_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[list[ModuleSummary]]:
    await service.reorder_modules(caller_id, data.ordered_ids)
    modules = await service.list_modules()
    return ActionResult.success([ModuleSummary.model_validate(m) for m in modules])


@router.patch(
    "/modules/{module_id}",
    response_model=ActionResult[ModuleInfo],
    status_code=status.HTTP_200_OK,
)
async def update_module(
    module_id: str,
    data: ModuleUpdate,
    service: DocumentationService = Depends(get_docs_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[ModuleInfo]:
    module = await service.update_module(caller_id, module_id, data)
    return ActionResult.success(ModuleInfo.model_validate(module))


@router.delete(
    "/modules/{module_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_module(
    module_id: str,
    service: DocumentationService = Depends(get_docs_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> None:
    """Delete a module with all of its classes."""
    await service.delete_module(caller_id, module_id)


@router.post(
    "/modules/{module_id}/classes/reorder",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def reorder_classes(
    module_id: str,
    data: ReorderRequest,
    service: DocumentationService = Depends(get_docs_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> None:
    await service.reorder_classes(caller_id, module_id, data.ordered_ids)


# --- Classes ---


@router.post(
    "/classes",
    response_model=ActionResult[ClassDetailResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_class(
    data: ClassInput,
    service: DocumentationService = Depends(get_docs_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[ClassDetailResponse]:
    """Create a class together with its methods and examples."""
    doc_class = await service.create_class(caller_id, data)
    return ActionResult.success(ClassDetailResponse.model_validate(doc_class))


@router.patch(
    "/classes/{class_id}",
    response_model=ActionResult[ClassDetailResponse],
    status_code=status.HTTP_200_OK,
)
async def update_class(
    class_id: str,
    data: ClassUpdate,
    service: DocumentationService = Depends(get_docs_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[ClassDetailResponse]:
    """
    Update a class.

    Supplying ``methods`` or ``examples`` replaces the stored list.
    """
    doc_class = await service.update_class(caller_id, class_id, data)
    return ActionResult.success(ClassDetailResponse.model_validate(doc_class))


@router.delete(
    "/classes/{class_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_class(
    class_id: str,
    service: DocumentationService = Depends(get_docs_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> None:
    await service.delete_class(caller_id, class_id)
