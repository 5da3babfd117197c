"""Mock blog database"""

from datetime import datetime, timezone
from typing import Optional

from ..models.blog import BlogPost


def _seed_blogs() -> dict[str, BlogPost]:
    posts = [
        BlogPost(
            id="blog-001",
            slug="health-benefits-of-olive-oil",
            title="Health Benefits of Olive Oil",
            excerpt="Why a spoon of olive oil a day is good for the heart.",
            content="Olive oil is rich in monounsaturated fats and polyphenols...",
            author="Dr. Ayse Kardiyolog",
            tags=["health", "olive oil"],
            created_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
        ),
        BlogPost(
            id="blog-002",
            slug="what-is-cold-pressed-olive-oil",
            title="What Is Cold Pressed Olive Oil?",
            excerpt="The difference between cold pressed and refined oils.",
            content="Cold pressing keeps the temperature below 27 degrees...",
            author="Fatma Demir",
            tags=["production"],
            created_at=datetime(2024, 4, 12, tzinfo=timezone.utc),
        ),
        BlogPost(
            id="blog-003",
            slug="harvest-diary",
            title="Harvest Diary",
            excerpt="Draft notes from this year's harvest.",
            content="Draft.",
            author="Mehmet Ozturk",
            published=False,
            created_at=datetime(2024, 10, 2, tzinfo=timezone.utc),
        ),
    ]
    return {p.id: p for p in posts}


class BlogDatabase:
    """In-memory blog storage"""

    def __init__(self):
        self.posts = _seed_blogs()

    def list_published(self) -> list[BlogPost]:
        """Published posts, newest first"""
        posts = [p for p in self.posts.values() if p.published]
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts

    def get_post(self, post_id: str) -> Optional[BlogPost]:
        """Get a published post by ID or slug"""
        post = self.posts.get(post_id)
        if post is None:
            post = next((p for p in self.posts.values() if p.slug == post_id), None)
        if post is None or not post.published:
            return None
        return post


# Singleton instance
blog_db = BlogDatabase()
