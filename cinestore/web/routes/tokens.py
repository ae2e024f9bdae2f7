"""
Routes des jetons : renvoi du jeton d'activation, jeton d'authentification.
"""

from fastapi import APIRouter, Depends, status

from cinestore.services.users import UserService

from ..deps import get_user_service
from ..schemas import CreateAuthenticationTokenRequest, ResendActivationRequest, token_to_dict

router = APIRouter(prefix="/v1/tokens", tags=["tokens"])


@router.post("/activation", status_code=status.HTTP_202_ACCEPTED)
async def resend_activation_token(
    body: ResendActivationRequest, service: UserService = Depends(get_user_service)
) -> dict:
    await service.resend_activation_token(body.email)
    return {"message": "an email will be sent to you containing activation instructions"}


@router.post("/authentication", status_code=status.HTTP_201_CREATED)
async def create_authentication_token(
    body: CreateAuthenticationTokenRequest, service: UserService = Depends(get_user_service)
) -> dict:
    token = await service.create_authentication_token(body.email, body.password)
    return {"authentication_token": token_to_dict(token)}
