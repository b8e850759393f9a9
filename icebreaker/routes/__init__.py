"""API routes."""

from fastapi import APIRouter

from icebreaker.routes import categories, questions, ratings

api_router = APIRouter(prefix="/api")

# Question CRUD, random pick, admin stats
api_router.include_router(questions.router, prefix="/questions", tags=["questions"])

# Ratings (submission + per-question aggregates)
api_router.include_router(ratings.router, tags=["ratings"])

# Admin form helpers
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
