"""
Implementation SQLModel du repository Permission.

Les attributions vivent dans users_permissions (cle composite
user_id/permission_id). Une attribution deja presente est ignoree.
"""

import sqlalchemy as sa
from sqlmodel import select

from cinestore.core.entities.permission import Permissions
from cinestore.core.ports.repositories import IPermissionRepository
from cinestore.infrastructure.persistence.models import PermissionModel, UserPermissionModel
from cinestore.infrastructure.persistence.repositories.base import SQLModelRepository


class SQLModelPermissionRepository(SQLModelRepository, IPermissionRepository):
    """Repository SQLModel pour les permissions."""

    timeout = 3.0

    async def get_all_for_user(self, user_id: int) -> Permissions:
        """Codes de permission detenus par l'utilisateur (liste vide si aucun)."""
        statement = (
            select(PermissionModel.code)
            .join(UserPermissionModel, UserPermissionModel.permission_id == PermissionModel.id)
            .where(UserPermissionModel.user_id == user_id)
            .order_by(PermissionModel.code)
        )
        async with self._operation("permissions.get_all_for_user") as session:
            codes = (await session.exec(statement)).all()
        return Permissions(codes)

    async def add_for_user(self, user_id: int, *codes: str) -> None:
        """
        Attribue les permissions en une seule requete INSERT ... SELECT.

        Les codes inconnus sont ignores, ainsi que les paires deja attribuees.
        """
        if not codes:
            return
        already_granted = sa.select(UserPermissionModel.permission_id).where(
            UserPermissionModel.user_id == user_id
        )
        source = sa.select(sa.literal(user_id), PermissionModel.id).where(
            PermissionModel.code.in_(codes),
            PermissionModel.id.not_in(already_granted),
        )
        statement = sa.insert(UserPermissionModel).from_select(
            ["user_id", "permission_id"], source
        )
        async with self._operation("permissions.add_for_user") as session:
            await session.exec(statement)
            await session.commit()
