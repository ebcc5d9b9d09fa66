from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.utils.metadata import get_project_version

router = APIRouter(tags=["health"])


@router.get("/health-check", response_class=PlainTextResponse)
async def health_check() -> str:
    return f"App version: {get_project_version()}"
