"""API route registration."""

from fastapi import APIRouter

from . import handlers


def get_api_router(prefix: str = "/api") -> APIRouter:
    router = APIRouter()
    router.include_router(handlers.router, prefix=prefix, tags=["recurrence"])
    return router
