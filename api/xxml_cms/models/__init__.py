"""Database models for the XXML CMS API."""

from xxml_cms.models.docs import DocClass, DocExample, DocMethod, DocModule
from xxml_cms.models.download import PLATFORMS, Download
from xxml_cms.models.forum import POST_TYPES, Category, Post, PostComment, PostCommentRevision
from xxml_cms.models.user import USER_ROLES, APIKey, User

__all__ = [
    "User",
    "APIKey",
    "USER_ROLES",
    "DocModule",
    "DocClass",
    "DocMethod",
    "DocExample",
    "Category",
    "Post",
    "PostComment",
    "PostCommentRevision",
    "POST_TYPES",
    "Download",
    "PLATFORMS",
]
