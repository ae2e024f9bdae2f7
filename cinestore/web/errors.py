"""
Conversion des erreurs du domaine en reponses HTTP.

Toutes les reponses d'erreur ont la forme {"error": ...}. Les erreurs
internes sont journalisees avec leur detail, le client ne recoit qu'un
message generique.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from cinestore.core.errors import (
    AuthenticationRequiredError,
    BadRequestError,
    CineStoreError,
    DuplicateEmailError,
    EditConflictError,
    InactiveAccountError,
    InvalidCredentialsError,
    NotPermittedError,
    OperationTimeoutError,
    RecordNotFoundError,
    ValidationFailure,
)

NOT_FOUND_MESSAGE = "the requested resource could not be found"
EDIT_CONFLICT_MESSAGE = "unable to update the record due to an edit conflict, please try again"
SERVER_ERROR_MESSAGE = "the server encountered a problem and could not process your request"
TIMEOUT_MESSAGE = "the server is temporarily unable to complete your request, please retry"
DUPLICATE_EMAIL_MESSAGE = "a user with this email address already exists"


def error_response(status_code: int, message, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _status_for(exc: CineStoreError) -> tuple[int, object, dict[str, str] | None]:
    """Statut HTTP, corps et en-tetes pour une erreur du domaine."""
    if isinstance(exc, ValidationFailure):
        return 422, exc.as_dict(), None
    if isinstance(exc, BadRequestError):
        return 400, str(exc), None
    if isinstance(exc, DuplicateEmailError):
        return 422, {"email": DUPLICATE_EMAIL_MESSAGE}, None
    if isinstance(exc, RecordNotFoundError):
        return 404, NOT_FOUND_MESSAGE, None
    if isinstance(exc, EditConflictError):
        return 409, EDIT_CONFLICT_MESSAGE, None
    if isinstance(exc, OperationTimeoutError):
        return 503, TIMEOUT_MESSAGE, {"Retry-After": "1"}
    if isinstance(exc, InvalidCredentialsError):
        return 401, str(exc), None
    if isinstance(exc, AuthenticationRequiredError):
        return 401, str(exc), {"WWW-Authenticate": "Bearer"}
    if isinstance(exc, (InactiveAccountError, NotPermittedError)):
        return 403, str(exc), None
    return 500, SERVER_ERROR_MESSAGE, None


async def handle_domain_error(request: Request, exc: CineStoreError) -> JSONResponse:
    status_code, message, headers = _status_for(exc)
    if status_code >= 500:
        logger.opt(exception=exc).error(
            "Erreur serveur", method=request.method, url=str(request.url), error=type(exc).__name__
        )
    return error_response(status_code, message, headers)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """JSON mal forme, type incorrect ou champ inconnu : 400."""
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in error['loc'] if loc != 'body')}: {error['msg']}"
        for error in exc.errors()
    )
    return error_response(400, details or "badly-formed request")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CineStoreError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
