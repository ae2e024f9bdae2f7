"""
Routes du catalogue de films.

Lecture : permission movies:read. Ecriture : permission movies:write.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, Response, status

from cinestore.core.entities.permission import PERMISSION_MOVIES_READ, PERMISSION_MOVIES_WRITE
from cinestore.core.errors import BadRequestError
from cinestore.services.movies import MovieService

from ..deps import get_movie_service, read_id_param, require_permission
from ..schemas import CreateMovieRequest, UpdateMovieRequest, metadata_to_dict, movie_to_dict

router = APIRouter(prefix="/v1/movies", tags=["movies"])

can_read = require_permission(PERMISSION_MOVIES_READ)
can_write = require_permission(PERMISSION_MOVIES_WRITE)


def _expected_version(raw: Optional[str]) -> Optional[int]:
    """Version annoncee par X-Expected-Version ; elle doit etre un entier."""
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise BadRequestError("X-Expected-Version must be an integer") from None


@router.get("", dependencies=[Depends(can_read)])
async def list_movies(request: Request, service: MovieService = Depends(get_movie_service)) -> dict:
    movies, metadata = await service.list_movies(dict(request.query_params))
    return {
        "movies": [movie_to_dict(movie) for movie in movies],
        "metadata": metadata_to_dict(metadata),
    }


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(can_write)])
async def create_movie(
    body: CreateMovieRequest,
    response: Response,
    service: MovieService = Depends(get_movie_service),
) -> dict:
    movie = await service.create(body.title, body.year, body.runtime, body.genres)
    response.headers["Location"] = f"/v1/movies/{movie.id}"
    return {"movie": movie_to_dict(movie)}


@router.get("/{movie_id}", dependencies=[Depends(can_read)])
async def show_movie(movie_id: str, service: MovieService = Depends(get_movie_service)) -> dict:
    movie = await service.show(read_id_param(movie_id))
    return {"movie": movie_to_dict(movie)}


@router.patch("/{movie_id}", dependencies=[Depends(can_write)])
async def update_movie(
    movie_id: str,
    body: UpdateMovieRequest,
    expected_version: Optional[str] = Header(default=None, alias="X-Expected-Version"),
    service: MovieService = Depends(get_movie_service),
) -> dict:
    movie = await service.update(
        read_id_param(movie_id),
        title=body.title,
        year=body.year,
        runtime=body.runtime,
        genres=body.genres,
        expected_version=_expected_version(expected_version),
    )
    return {"movie": movie_to_dict(movie)}


@router.delete("/{movie_id}", dependencies=[Depends(can_write)])
async def delete_movie(movie_id: str, service: MovieService = Depends(get_movie_service)) -> dict:
    await service.delete(read_id_param(movie_id))
    return {"message": "movie successfully deleted"}
