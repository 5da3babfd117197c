"""Blog models for mock store"""

from datetime import datetime

from .base import CamelModel


class BlogPost(CamelModel):
    """Blog post"""
    id: str
    slug: str
    title: str
    excerpt: str
    content: str
    author: str
    tags: list[str] = []
    published: bool = True
    created_at: datetime
