"""Blog router: staff-written posts of type BLOG."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from xxml_cms.auth.dependencies import get_caller_id
from xxml_cms.dependencies import get_post_service
from xxml_cms.middleware.rate_limit import create_post_limit, limiter
from xxml_cms.routers.forum import post_list_item, post_response
from xxml_cms.schemas.common import ActionResult
from xxml_cms.schemas.posts import (
    CreateBlogPostRequest,
    ListPostsResponse,
    PostResponse,
    UpdateBlogPostRequest,
)
from xxml_cms.services.posts import PostService

router = APIRouter(prefix="/api/v1/blog", tags=["Blog"])


@router.get(
    "/posts",
    response_model=ActionResult[ListPostsResponse],
    status_code=status.HTTP_200_OK,
)
async def list_blog_posts(
    service: PostService = Depends(get_post_service),
    limit: int = Query(default=20, ge=1, le=100, description="Items per page"),
) -> ActionResult[ListPostsResponse]:
    posts = await service.list_blog_posts(limit=limit)
    return ActionResult.success(ListPostsResponse(items=[post_list_item(p) for p in posts]))


@router.post(
    "/posts",
    response_model=ActionResult[PostResponse],
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(create_post_limit)
async def create_blog_post(
    request: Request,
    data: CreateBlogPostRequest,
    service: PostService = Depends(get_post_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[PostResponse]:
    """
    Publish a blog post.

    Requires a developer, moderator or admin role. Without an excerpt the
    first 200 characters of the body are used.
    """
    post = await service.create_blog_post(caller_id, data.title, data.body, data.excerpt)
    return ActionResult.success(post_response(post))


@router.get(
    "/posts/{slug}",
    response_model=ActionResult[PostResponse],
    status_code=status.HTTP_200_OK,
)
async def get_blog_post(
    slug: str,
    service: PostService = Depends(get_post_service),
) -> ActionResult[PostResponse]:
    post = await service.get_blog_post(slug)
    return ActionResult.success(post_response(post))


@router.patch(
    "/posts/{post_id}",
    response_model=ActionResult[PostResponse],
    status_code=status.HTTP_200_OK,
)
async def update_blog_post(
    post_id: str,
    data: UpdateBlogPostRequest,
    service: PostService = Depends(get_post_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[PostResponse]:
    post = await service.update_blog_post(
        caller_id, post_id, data.title, data.body, data.excerpt
    )
    return ActionResult.success(post_response(post))


@router.delete(
    "/posts/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_blog_post(
    post_id: str,
    service: PostService = Depends(get_post_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> None:
    await service.delete_blog_post(caller_id, post_id)
