"""JSON API routes."""

from fastapi import APIRouter

from blog.api import admin, auth, health, posts, profile

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(posts.router, prefix="/posts", tags=["posts"])
router.include_router(profile.router, prefix="/user", tags=["profile"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
