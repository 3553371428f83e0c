"""API router aggregation."""

from fastapi import APIRouter

from todoapi.api.todos import router as todos_router
from todoapi.api.categories import router as categories_router

router = APIRouter()

router.include_router(todos_router)
router.include_router(categories_router)
