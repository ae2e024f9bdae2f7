"""
Taxonomie des erreurs du domaine CineStore.

Les repositories traduisent les signaux propres au moteur de stockage
(absence de ligne, violation de contrainte, etc.) en ces exceptions.
Les couches superieures (services, web, CLI) n'inspectent jamais
les exceptions SQLAlchemy ou du driver.
"""

from typing import Optional


class CineStoreError(Exception):
    """Classe de base de toutes les erreurs du domaine."""


class ValidationFailure(CineStoreError):
    """
    Une ou plusieurs paires champ/message ont echoue a la validation.

    Attributes:
        errors: Liste ordonnee des paires (champ, message)
    """

    def __init__(self, errors: list[tuple[str, str]]) -> None:
        self.errors = list(errors)
        super().__init__(f"Validation echouee : {self.as_dict()}")

    def as_dict(self) -> dict[str, str]:
        """Retourne {champ: message}, en gardant le premier message par champ."""
        result: dict[str, str] = {}
        for field, message in self.errors:
            result.setdefault(field, message)
        return result


class RecordNotFoundError(CineStoreError):
    """Enregistrement (ou jeton) absent ou expire."""

    def __init__(self, message: str = "record not found") -> None:
        super().__init__(message)


class EditConflictError(CineStoreError):
    """La version presentee ne correspond plus a la version stockee."""

    def __init__(self, message: str = "edit conflict") -> None:
        super().__init__(message)


class BadRequestError(CineStoreError):
    """Requete mal formee (en-tete ou parametre illisible)."""


class DuplicateEmailError(CineStoreError):
    """L'adresse email est deja utilisee par un autre utilisateur."""

    def __init__(self, message: str = "duplicate email") -> None:
        super().__init__(message)


class OperationTimeoutError(CineStoreError):
    """
    L'operation de stockage a depasse son delai.

    Attributes:
        operation: Nom de l'operation interrompue
        timeout: Delai alloue en secondes
    """

    def __init__(self, operation: str, timeout: float) -> None:
        self.operation = operation
        self.timeout = timeout
        super().__init__(f"{operation} timed out after {timeout}s")


class PersistenceError(CineStoreError):
    """Toute autre erreur du stockage. Le detail reste dans les logs."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed")


class PasswordHashError(CineStoreError):
    """Echec inattendu de l'algorithme de hachage (hors simple non-correspondance)."""


class InvalidCredentialsError(CineStoreError):
    """Email ou mot de passe incorrect."""

    def __init__(self) -> None:
        super().__init__("invalid authentication credentials")


class AuthenticationRequiredError(CineStoreError):
    """Aucun jeton d'authentification valide n'a ete presente."""

    def __init__(self, message: str = "you must be authenticated to access this resource") -> None:
        super().__init__(message)


class InactiveAccountError(CineStoreError):
    """Le compte n'est pas encore active."""

    def __init__(self) -> None:
        super().__init__("your user account must be activated to access this resource")


class NotPermittedError(CineStoreError):
    """
    L'utilisateur ne detient pas la permission requise.

    Attributes:
        code: Code de permission manquant
    """

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__("your user account doesn't have the necessary permissions to access this resource")
