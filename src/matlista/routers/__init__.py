"""API routers for the matlista application."""

from matlista.routers.grocery import router as grocery_router
from matlista.routers.ingredients import router as ingredients_router

__all__ = [
    "grocery_router",
    "ingredients_router",
]
