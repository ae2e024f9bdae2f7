"""Ensemble de permissions d'un utilisateur."""

PERMISSION_MOVIES_READ = "movies:read"
PERMISSION_MOVIES_WRITE = "movies:write"

KNOWN_PERMISSIONS = (PERMISSION_MOVIES_READ, PERMISSION_MOVIES_WRITE)


class Permissions(list[str]):
    """Liste de codes de permission, testee par appartenance lineaire."""

    def include(self, code: str) -> bool:
        return code in self
