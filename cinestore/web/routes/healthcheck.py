"""
Route de sante de l'API.
"""

from fastapi import APIRouter, Request

from cinestore import __version__

router = APIRouter(prefix="/v1", tags=["healthcheck"])


@router.get("/healthcheck")
async def healthcheck(request: Request) -> dict:
    settings = request.app.state.container.config()
    return {
        "status": "available",
        "system_info": {"environment": settings.env, "version": __version__},
    }
