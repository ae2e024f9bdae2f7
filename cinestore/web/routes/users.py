"""
Routes des comptes : inscription et activation.
"""

from fastapi import APIRouter, Depends, status

from cinestore.services.users import UserService

from ..deps import get_user_service
from ..schemas import ActivateUserRequest, RegisterUserRequest, user_to_dict

router = APIRouter(prefix="/v1/users", tags=["users"])


@router.post("", status_code=status.HTTP_202_ACCEPTED)
async def register_user(
    body: RegisterUserRequest, service: UserService = Depends(get_user_service)
) -> dict:
    """Inscrit l'utilisateur ; l'email d'activation part en tache de fond."""
    user = await service.register(body.name, body.email, body.password)
    return {"user": user_to_dict(user)}


@router.put("/activated")
async def activate_user(
    body: ActivateUserRequest, service: UserService = Depends(get_user_service)
) -> dict:
    user = await service.activate(body.token)
    return {"user": user_to_dict(user)}
