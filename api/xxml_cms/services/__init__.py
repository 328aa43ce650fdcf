"""Services for the XXML CMS API."""

from xxml_cms.services.admin import AdminService
from xxml_cms.services.cache import PathRevalidator
from xxml_cms.services.docs import DocumentationService
from xxml_cms.services.downloads import DownloadService
from xxml_cms.services.posts import PostService
from xxml_cms.services.seeding import DocumentationSeeder, seed_documentation

__all__ = [
    "AdminService",
    "DocumentationSeeder",
    "DocumentationService",
    "DownloadService",
    "PathRevalidator",
    "PostService",
    "seed_documentation",
]
