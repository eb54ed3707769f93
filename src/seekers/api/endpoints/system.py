"""Health and error pages."""

from typing import Annotated

from fastapi import APIRouter, Query

from seekers.api.dependencies import OptionalUserDep, page_context
from seekers.schemas import PageContext

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@router.get("/error", response_model=PageContext)
def error_page(
    user: OptionalUserDep,
    error: Annotated[str | None, Query()] = None,
) -> PageContext:
    """Generic error page context."""
    return PageContext(**page_context(user, error or "Something went wrong"))
