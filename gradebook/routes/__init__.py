"""
gradebook/routes/__init__.py
Route registration
"""
from fastapi import APIRouter

from gradebook.routes import grades

router = APIRouter()
router.include_router(grades.router)
