"""Forum and blog Pydantic schemas."""

from pydantic import BaseModel, field_validator

from xxml_cms.models.forum import POST_TYPES

TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 200
BODY_MIN_LENGTH = 20
EXCERPT_MAX_LENGTH = 500


# --- Validated inputs (used by the post service) ---


class PostFields(BaseModel):
    """Title and body rules shared by every post kind."""

    title: str
    body: str

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate title length."""
        if len(v) < TITLE_MIN_LENGTH:
            raise ValueError(f"Title must be at least {TITLE_MIN_LENGTH} characters")
        if len(v) > TITLE_MAX_LENGTH:
            raise ValueError(f"Title must be {TITLE_MAX_LENGTH} characters or less")
        return v

    @field_validator("body")
    @classmethod
    def validate_body(cls, v: str) -> str:
        """Validate body length."""
        if len(v) < BODY_MIN_LENGTH:
            raise ValueError(f"Content must be at least {BODY_MIN_LENGTH} characters")
        return v


class ForumPostFields(PostFields):
    """Fields for a new forum post."""

    category_id: str
    type: str = "DISCUSSION"

    @field_validator("category_id")
    @classmethod
    def validate_category(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Please select a category")
        return v.strip()

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        if v not in POST_TYPES:
            raise ValueError(f"Post type must be one of {', '.join(POST_TYPES)}")
        return v


class BlogPostFields(PostFields):
    """Fields for a blog post; the excerpt is optional."""

    excerpt: str | None = None

    @field_validator("excerpt")
    @classmethod
    def validate_excerpt(cls, v: str | None) -> str | None:
        if v is not None and len(v) > EXCERPT_MAX_LENGTH:
            raise ValueError(f"Excerpt must be {EXCERPT_MAX_LENGTH} characters or less")
        return v


class CommentFields(BaseModel):
    """Comment body; stored trimmed."""

    body: str

    @field_validator("body")
    @classmethod
    def validate_body(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Comment cannot be empty")
        if len(v) > 65536:
            raise ValueError("Comment must be 64KB or less")
        return v.strip()


# --- Requests ---


class CreatePostRequest(BaseModel):
    """Request to create a forum post."""

    title: str
    body: str
    category_id: str
    type: str = "DISCUSSION"


class CreateBlogPostRequest(BaseModel):
    """Request to create a blog post."""

    title: str
    body: str
    excerpt: str | None = None


class UpdatePostRequest(BaseModel):
    """Request to update a forum post."""

    title: str
    body: str


class UpdateBlogPostRequest(BaseModel):
    """Request to update a blog post."""

    title: str
    body: str
    excerpt: str | None = None


class PinPostRequest(BaseModel):
    """Request to pin or unpin a post."""

    is_pinned: bool


class CommentRequest(BaseModel):
    """Request to add a comment."""

    body: str
    parent_id: str | None = None


class EditCommentRequest(BaseModel):
    """Request to edit a comment."""

    body: str


# --- Responses ---


class CategoryResponse(BaseModel):
    """Forum category."""

    id: str
    name: str
    slug: str
    description: str | None


class PostListItem(BaseModel):
    """Post summary for list endpoints."""

    id: str
    title: str
    slug: str
    excerpt: str | None
    type: str
    category_slug: str | None
    author: str | None
    author_id: str | None
    view_count: int
    is_pinned: bool
    created_at: str


class PostResponse(BaseModel):
    """Full post response without comments."""

    id: str
    title: str
    slug: str
    body: str
    excerpt: str | None
    type: str
    category_id: str
    author: str | None
    author_id: str | None
    view_count: int
    is_pinned: bool
    created_at: str
    updated_at: str


class CommentResponse(BaseModel):
    """Response for a comment."""

    id: str
    post_id: str
    parent_id: str | None
    author: str | None
    author_id: str | None
    body: str
    created_at: str


class PostWithCommentsResponse(PostResponse):
    """Full post response with comments."""

    category_slug: str | None
    comments: list[CommentResponse]


class RevisionResponse(BaseModel):
    """Earlier version of a comment body."""

    id: str
    comment_id: str
    body: str
    editor_id: str | None
    created_at: str


class ListPostsResponse(BaseModel):
    """Response for listing posts."""

    items: list[PostListItem]


class ListRevisionsResponse(BaseModel):
    """Response for listing a comment's revisions."""

    items: list[RevisionResponse]


class PinResponse(BaseModel):
    """Response for pin action."""

    post_id: str
    is_pinned: bool
