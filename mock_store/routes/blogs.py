"""Blog API routes for mock store"""

from fastapi import APIRouter, HTTPException

from ..database.blogs import blog_db
from ..models.base import ApiResponse

router = APIRouter(prefix="/api/blogs", tags=["Blogs"])


@router.get("", response_model=ApiResponse)
async def list_blogs():
    """List published blog posts"""
    posts = blog_db.list_published()
    return ApiResponse(data=[p.model_dump(mode="json", by_alias=True) for p in posts])


@router.get("/{blog_id}", response_model=ApiResponse)
async def get_blog(blog_id: str):
    """Get a published blog post by ID or slug"""
    post = blog_db.get_post(blog_id)
    if not post:
        raise HTTPException(status_code=404, detail="Blog post not found")
    return ApiResponse(data=post.model_dump(mode="json", by_alias=True))
