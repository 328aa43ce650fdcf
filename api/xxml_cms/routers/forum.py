"""Forum router for posts, threaded comments, and revisions."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from xxml_cms.auth.dependencies import get_caller_id
from xxml_cms.dependencies import get_post_service
from xxml_cms.middleware.rate_limit import create_comment_limit, create_post_limit, limiter
from xxml_cms.models.forum import Category, Post, PostComment, PostCommentRevision
from xxml_cms.models.user import User
from xxml_cms.schemas.common import ActionResult
from xxml_cms.schemas.posts import (
    CategoryResponse,
    CommentRequest,
    CommentResponse,
    CreatePostRequest,
    EditCommentRequest,
    ListPostsResponse,
    ListRevisionsResponse,
    PinPostRequest,
    PinResponse,
    PostListItem,
    PostResponse,
    PostWithCommentsResponse,
    RevisionResponse,
    UpdatePostRequest,
)
from xxml_cms.services.posts import PostService

router = APIRouter(prefix="/api/v1/forum", tags=["Forum"])


def author_display(user: User | None) -> str | None:
    """Get display name for author."""
    if not user:
        return None
    return user.display_name or user.username


def category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        id=str(category.id),
        name=category.name,
        slug=category.slug,
        description=category.description,
    )


def post_list_item(post: Post) -> PostListItem:
    return PostListItem(
        id=str(post.id),
        title=post.title,
        slug=post.slug,
        excerpt=post.excerpt,
        type=post.type,
        category_slug=post.category.slug if post.category else None,
        author=author_display(post.author),
        author_id=str(post.author_id) if post.author_id else None,
        view_count=post.view_count,
        is_pinned=post.is_pinned,
        created_at=post.created_at.isoformat(),
    )


def post_response(post: Post) -> PostResponse:
    return PostResponse(
        id=str(post.id),
        title=post.title,
        slug=post.slug,
        body=post.body,
        excerpt=post.excerpt,
        type=post.type,
        category_id=str(post.category_id),
        author=author_display(post.author),
        author_id=str(post.author_id) if post.author_id else None,
        view_count=post.view_count,
        is_pinned=post.is_pinned,
        created_at=post.created_at.isoformat(),
        updated_at=post.updated_at.isoformat(),
    )


def comment_response(comment: PostComment) -> CommentResponse:
    return CommentResponse(
        id=str(comment.id),
        post_id=str(comment.post_id),
        parent_id=str(comment.parent_id) if comment.parent_id else None,
        author=author_display(comment.author),
        author_id=str(comment.author_id) if comment.author_id else None,
        body=comment.body,
        created_at=comment.created_at.isoformat(),
    )


def revision_response(revision: PostCommentRevision) -> RevisionResponse:
    return RevisionResponse(
        id=str(revision.id),
        comment_id=str(revision.comment_id),
        body=revision.body,
        editor_id=str(revision.editor_id) if revision.editor_id else None,
        created_at=revision.created_at.isoformat(),
    )


# --- Categories ---


@router.get(
    "/categories",
    response_model=ActionResult[list[CategoryResponse]],
    status_code=status.HTTP_200_OK,
)
async def list_categories(
    service: PostService = Depends(get_post_service),
) -> ActionResult[list[CategoryResponse]]:
    categories = await service.list_categories()
    return ActionResult.success([category_response(c) for c in categories])


# --- Posts ---


@router.get(
    "/posts",
    response_model=ActionResult[ListPostsResponse],
    status_code=status.HTTP_200_OK,
)
async def list_posts(
    service: PostService = Depends(get_post_service),
    category: str | None = Query(default=None, description="Category slug"),
    type: str | None = Query(default=None, description="Post type"),
    limit: int = Query(default=50, ge=1, le=100, description="Items per page"),
) -> ActionResult[ListPostsResponse]:
    """
    List forum posts.

    Pinned posts come first, then the newest.
    """
    posts = await service.list_forum_posts(category_slug=category, post_type=type, limit=limit)
    return ActionResult.success(ListPostsResponse(items=[post_list_item(p) for p in posts]))


@router.post(
    "/posts",
    response_model=ActionResult[PostResponse],
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(create_post_limit)
async def create_post(
    request: Request,
    data: CreatePostRequest,
    service: PostService = Depends(get_post_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[PostResponse]:
    """
    Create a forum post.

    BLOG posts may only be created by developers, moderators and admins.
    """
    post = await service.create_post(
        caller_id, data.title, data.body, data.category_id, data.type
    )
    return ActionResult.success(post_response(post))


@router.get(
    "/posts/{slug}",
    response_model=ActionResult[PostWithCommentsResponse],
    status_code=status.HTTP_200_OK,
)
async def get_post(
    slug: str,
    service: PostService = Depends(get_post_service),
) -> ActionResult[PostWithCommentsResponse]:
    """Get a post with all of its comments, oldest first."""
    post = await service.get_forum_post(slug)
    return ActionResult.success(
        PostWithCommentsResponse(
            **post_response(post).model_dump(),
            category_slug=post.category.slug if post.category else None,
            comments=[comment_response(c) for c in post.comments],
        )
    )


@router.patch(
    "/posts/{post_id}",
    response_model=ActionResult[PostResponse],
    status_code=status.HTTP_200_OK,
)
async def update_post(
    post_id: str,
    data: UpdatePostRequest,
    service: PostService = Depends(get_post_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[PostResponse]:
    """
    Update a post's title and body.

    Authors may edit their own posts; staff may edit any.
    """
    post = await service.update_forum_post(caller_id, post_id, data.title, data.body)
    return ActionResult.success(post_response(post))


@router.delete(
    "/posts/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_post(
    post_id: str,
    service: PostService = Depends(get_post_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> None:
    """Delete a post with all of its comments."""
    await service.delete_forum_post(caller_id, post_id)


@router.post(
    "/posts/{post_id}/pin",
    response_model=ActionResult[PinResponse],
    status_code=status.HTTP_200_OK,
)
async def pin_post(
    post_id: str,
    data: PinPostRequest,
    service: PostService = Depends(get_post_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[PinResponse]:
    post = await service.pin_post(caller_id, post_id, data.is_pinned)
    return ActionResult.success(PinResponse(post_id=str(post.id), is_pinned=post.is_pinned))


@router.post(
    "/posts/{post_id}/view",
    response_model=ActionResult[dict[str, bool]],
    status_code=status.HTTP_200_OK,
)
async def record_view(
    post_id: str,
    service: PostService = Depends(get_post_service),
) -> ActionResult[dict[str, bool]]:
    """Count a page view. Unknown posts are ignored."""
    counted = await service.increment_view_count(post_id)
    return ActionResult.success({"counted": counted})


# --- Comments ---


@router.post(
    "/posts/{post_id}/comments",
    response_model=ActionResult[CommentResponse],
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(create_comment_limit)
async def add_comment(
    request: Request,
    post_id: str,
    data: CommentRequest,
    service: PostService = Depends(get_post_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[CommentResponse]:
    """
    Add a comment to a post.

    ``parent_id`` makes it a reply; the parent must belong to the same post.
    """
    comment = await service.add_post_comment(caller_id, post_id, data.body, data.parent_id)
    return ActionResult.success(comment_response(comment))


@router.patch(
    "/comments/{comment_id}",
    response_model=ActionResult[CommentResponse],
    status_code=status.HTTP_200_OK,
)
async def edit_comment(
    comment_id: str,
    data: EditCommentRequest,
    service: PostService = Depends(get_post_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[CommentResponse]:
    """Edit a comment; the previous body is kept as a revision."""
    comment = await service.edit_post_comment(caller_id, comment_id, data.body)
    return ActionResult.success(comment_response(comment))


@router.delete(
    "/comments/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_comment(
    comment_id: str,
    service: PostService = Depends(get_post_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> None:
    """Delete a comment and its replies."""
    await service.delete_post_comment(caller_id, comment_id)


@router.get(
    "/comments/{comment_id}/revisions",
    response_model=ActionResult[ListRevisionsResponse],
    status_code=status.HTTP_200_OK,
)
async def list_revisions(
    comment_id: str,
    service: PostService = Depends(get_post_service),
) -> ActionResult[ListRevisionsResponse]:
    """Earlier bodies of a comment, newest first."""
    revisions = await service.list_comment_revisions(comment_id)
    return ActionResult.success(
        ListRevisionsResponse(items=[revision_response(r) for r in revisions])
    )
