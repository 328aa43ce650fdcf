"""Forum and blog post service: posts, threaded comments, and revisions."""

import logging
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from xxml_cms.database import atomic
from xxml_cms.errors import NotFound, ValidationFailed, WrongPostType
from xxml_cms.models.forum import Category, Post, PostComment, PostCommentRevision
from xxml_cms.schemas.common import parse_input
from xxml_cms.schemas.posts import BlogPostFields, CommentFields, ForumPostFields, PostFields
from xxml_cms.services.access import (
    ensure_elevated,
    ensure_owner_or_elevated,
    parse_id,
    require_caller,
)
from xxml_cms.services.cache import PathRevalidator
from xxml_cms.services.text import derive_excerpt, slugify, unique_slug

logger = logging.getLogger(__name__)

BLOG_ONLY_MESSAGE = "Only developers and admins can create blog posts"


def forum_path(post: Post) -> str:
    category_slug = post.category.slug if post.category else "general"
    return f"/forum/{category_slug}/{post.slug}"


class PostService:
    """Create, edit, moderate, and read forum and blog posts."""

    def __init__(self, db: AsyncSession, revalidator: PathRevalidator):
        self.db = db
        self.revalidator = revalidator

    # --- Lookups ---

    async def _get_post(self, post_id: UUID) -> Post:
        result = await self.db.execute(
            select(Post)
            .options(selectinload(Post.category), selectinload(Post.author))
            .where(Post.id == post_id)
        )
        post = result.scalar_one_or_none()
        if not post:
            raise NotFound("Post not found")
        return post

    async def _get_comment(self, comment_id: UUID) -> PostComment:
        result = await self.db.execute(
            select(PostComment)
            .options(
                selectinload(PostComment.author),
                selectinload(PostComment.post).selectinload(Post.category),
            )
            .where(PostComment.id == comment_id)
        )
        comment = result.scalar_one_or_none()
        if not comment:
            raise NotFound("Comment not found")
        return comment

    async def _unique_slug(self, title: str) -> str:
        return await unique_slug(self.db, Post.slug, slugify(title))

    async def _blog_category(self) -> Category:
        category = await self.db.scalar(select(Category).where(Category.slug == "blog"))
        if category is None:
            category = Category(name="Blog", slug="blog", description="Official blog posts")
            self.db.add(category)
        return category

    def _invalidate_post(self, post: Post) -> None:
        self.revalidator.revalidate("/forum")
        self.revalidator.revalidate(forum_path(post))
        if post.type == "BLOG":
            self.revalidator.revalidate("/blog")
            self.revalidator.revalidate(f"/blog/{post.slug}")

    # --- Posts ---

    async def create_post(
        self,
        caller_id: UUID | None,
        title: str,
        body: str,
        category_id: str | UUID,
        post_type: str = "DISCUSSION",
    ) -> Post:
        """
        Create a forum post.

        Any signed-in user may open a DISCUSSION or QUESTION; BLOG posts
        need an elevated role.
        """
        user = await require_caller(self.db, caller_id)
        if post_type == "BLOG":
            ensure_elevated(user, BLOG_ONLY_MESSAGE)
        fields = parse_input(
            ForumPostFields,
            title=title,
            body=body,
            category_id=str(category_id) if category_id is not None else "",
            type=post_type or "DISCUSSION",
        )

        try:
            category_uuid = UUID(fields.category_id)
        except ValueError:
            raise ValidationFailed("category_id", "Invalid category") from None
        category = await self.db.get(Category, category_uuid)
        if category is None:
            raise ValidationFailed("category_id", "Invalid category")

        post = Post(
            title=fields.title,
            slug=await self._unique_slug(fields.title),
            body=fields.body,
            excerpt=derive_excerpt(fields.body),
            type=fields.type,
            category=category,
            author=user,
        )
        async with atomic(self.db):
            self.db.add(post)

        logger.info("Post %s created by %s", post.slug, user.username)
        self.revalidator.revalidate("/forum")
        if post.type == "BLOG":
            self.revalidator.revalidate("/blog")
        return post

    async def create_blog_post(
        self,
        caller_id: UUID | None,
        title: str,
        body: str,
        excerpt: str | None = None,
    ) -> Post:
        """Create a blog post in the blog category (created on first use)."""
        user = await require_caller(self.db, caller_id)
        ensure_elevated(user, BLOG_ONLY_MESSAGE)
        fields = parse_input(BlogPostFields, title=title, body=body, excerpt=excerpt)

        slug = await self._unique_slug(fields.title)
        async with atomic(self.db):
            category = await self._blog_category()
            post = Post(
                title=fields.title,
                slug=slug,
                body=fields.body,
                excerpt=derive_excerpt(fields.body, fields.excerpt),
                type="BLOG",
                category=category,
                author=user,
            )
            self.db.add(post)

        logger.info("Blog post %s created by %s", post.slug, user.username)
        self.revalidator.revalidate("/blog")
        return post

    async def update_forum_post(
        self,
        caller_id: UUID | None,
        post_id: UUID | str,
        title: str,
        body: str,
    ) -> Post:
        """Edit a post as its author or as staff; blog posts stay staff-only."""
        user = await require_caller(self.db, caller_id)
        post = await self._get_post(parse_id(post_id, "Post ID"))
        if post.type == "BLOG":
            ensure_elevated(user)
        else:
            ensure_owner_or_elevated(user, post.author_id)
        fields = parse_input(PostFields, title=title, body=body)

        async with atomic(self.db):
            post.title = fields.title
            post.body = fields.body
            post.excerpt = derive_excerpt(fields.body)

        self._invalidate_post(post)
        return post

    async def update_blog_post(
        self,
        caller_id: UUID | None,
        post_id: UUID | str,
        title: str,
        body: str,
        excerpt: str | None = None,
    ) -> Post:
        """Edit a blog post; authorship grants nothing here."""
        user = await require_caller(self.db, caller_id)
        post = await self._get_post(parse_id(post_id, "Post ID"))
        ensure_elevated(user)
        if post.type != "BLOG":
            raise WrongPostType()
        fields = parse_input(BlogPostFields, title=title, body=body, excerpt=excerpt)

        async with atomic(self.db):
            post.title = fields.title
            post.body = fields.body
            post.excerpt = derive_excerpt(fields.body, fields.excerpt)

        self.revalidator.revalidate("/blog")
        self.revalidator.revalidate(f"/blog/{post.slug}")
        return post

    async def delete_forum_post(self, caller_id: UUID | None, post_id: UUID | str) -> None:
        user = await require_caller(self.db, caller_id)
        post = await self._get_post(parse_id(post_id, "Post ID"))
        if post.type == "BLOG":
            ensure_elevated(user)
        else:
            ensure_owner_or_elevated(user, post.author_id)

        async with atomic(self.db):
            await self.db.delete(post)

        logger.info("Post %s deleted by %s", post.slug, user.username)
        self._invalidate_post(post)

    async def delete_blog_post(self, caller_id: UUID | None, post_id: UUID | str) -> None:
        user = await require_caller(self.db, caller_id)
        post = await self._get_post(parse_id(post_id, "Post ID"))
        ensure_elevated(user)
        if post.type != "BLOG":
            raise WrongPostType()

        async with atomic(self.db):
            await self.db.delete(post)

        logger.info("Blog post %s deleted by %s", post.slug, user.username)
        self.revalidator.revalidate("/blog")
        self.revalidator.revalidate(f"/blog/{post.slug}")

    async def pin_post(self, caller_id: UUID | None, post_id: UUID | str, is_pinned: bool) -> Post:
        user = await require_caller(self.db, caller_id)
        post = await self._get_post(parse_id(post_id, "Post ID"))
        ensure_elevated(user)

        async with atomic(self.db):
            post.is_pinned = is_pinned

        self.revalidator.revalidate("/forum")
        return post

    async def increment_view_count(self, post_id: UUID | str) -> bool:
        """Bump the view counter; unknown posts are ignored."""
        pid = parse_id(post_id, "Post ID")
        async with atomic(self.db):
            result = await self.db.execute(
                update(Post)
                .where(Post.id == pid)
                .values(view_count=Post.view_count + 1, updated_at=Post.updated_at)
                .execution_options(synchronize_session=False)
            )
        return result.rowcount > 0

    # --- Comments ---

    async def add_post_comment(
        self,
        caller_id: UUID | None,
        post_id: UUID | str,
        body: str,
        parent_id: UUID | str | None = None,
    ) -> PostComment:
        user = await require_caller(self.db, caller_id)
        post = await self._get_post(parse_id(post_id, "Post ID"))
        fields = parse_input(CommentFields, body=body)

        parent_uuid = None
        if parent_id:
            try:
                parent_uuid = parse_id(parent_id, "Parent ID")
            except ValidationFailed:
                raise ValidationFailed("parent_id", "Invalid parent comment") from None
            parent = await self.db.get(PostComment, parent_uuid)
            if parent is None or parent.post_id != post.id:
                raise ValidationFailed("parent_id", "Invalid parent comment")

        comment = PostComment(
            post_id=post.id,
            parent_id=parent_uuid,
            author=user,
            body=fields.body,
        )
        async with atomic(self.db):
            self.db.add(comment)

        self.revalidator.revalidate("/forum")
        self.revalidator.revalidate(forum_path(post))
        return comment

    async def edit_post_comment(
        self,
        caller_id: UUID | None,
        comment_id: UUID | str,
        new_body: str,
    ) -> PostComment:
        """
        Replace a comment's body.

        When the trimmed body actually changes, the previous body is kept as
        a revision attributed to the editor, in the same transaction as the
        overwrite.
        """
        user = await require_caller(self.db, caller_id)
        comment = await self._get_comment(parse_id(comment_id, "Comment ID"))
        ensure_owner_or_elevated(user, comment.author_id)
        fields = parse_input(CommentFields, body=new_body)

        async with atomic(self.db):
            if fields.body != comment.body:
                self.db.add(
                    PostCommentRevision(
                        comment_id=comment.id,
                        body=comment.body,
                        editor_id=user.id,
                    )
                )
                comment.body = fields.body

        self.revalidator.revalidate("/forum")
        if comment.post is not None:
            self.revalidator.revalidate(forum_path(comment.post))
        return comment

    async def delete_post_comment(self, caller_id: UUID | None, comment_id: UUID | str) -> None:
        user = await require_caller(self.db, caller_id)
        comment = await self._get_comment(parse_id(comment_id, "Comment ID"))
        ensure_owner_or_elevated(user, comment.author_id)
        post = comment.post

        async with atomic(self.db):
            await self.db.delete(comment)

        self.revalidator.revalidate("/forum")
        if post is not None:
            self.revalidator.revalidate(forum_path(post))

    # --- Reads ---

    async def list_categories(self) -> list[Category]:
        result = await self.db.execute(select(Category).order_by(Category.sort_order, Category.name))
        return list(result.scalars().all())

    async def list_forum_posts(
        self,
        category_slug: str | None = None,
        post_type: str | None = None,
        limit: int = 50,
    ) -> list[Post]:
        """Pinned posts first, then newest."""
        query = select(Post).options(selectinload(Post.author), selectinload(Post.category))
        if category_slug:
            query = query.join(Category, Post.category_id == Category.id).where(
                Category.slug == category_slug
            )
        if post_type:
            query = query.where(Post.type == post_type)
        query = query.order_by(Post.is_pinned.desc(), Post.created_at.desc()).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_forum_post(self, slug: str) -> Post:
        result = await self.db.execute(
            select(Post)
            .options(
                selectinload(Post.author),
                selectinload(Post.category),
                selectinload(Post.comments).selectinload(PostComment.author),
            )
            .where(Post.slug == slug)
            .execution_options(populate_existing=True)
        )
        post = result.scalar_one_or_none()
        if not post:
            raise NotFound("Post not found")
        return post

    async def list_blog_posts(self, limit: int = 20) -> list[Post]:
        result = await self.db.execute(
            select(Post)
            .options(selectinload(Post.author), selectinload(Post.category))
            .where(Post.type == "BLOG")
            .order_by(Post.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_blog_post(self, slug: str) -> Post:
        result = await self.db.execute(
            select(Post)
            .options(selectinload(Post.author), selectinload(Post.category))
            .where(Post.slug == slug)
        )
        post = result.scalar_one_or_none()
        if not post:
            raise NotFound("Post not found")
        if post.type != "BLOG":
            raise WrongPostType()
        return post

    async def list_comment_revisions(self, comment_id: UUID | str) -> list[PostCommentRevision]:
        """Earlier bodies of a comment, newest first."""
        cid = parse_id(comment_id, "Comment ID")
        if await self.db.get(PostComment, cid) is None:
            raise NotFound("Comment not found")
        result = await self.db.execute(
            select(PostCommentRevision)
            .where(PostCommentRevision.comment_id == cid)
            .order_by(PostCommentRevision.created_at.desc())
        )
        return list(result.scalars().all())
