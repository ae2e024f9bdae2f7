"""
Service des comptes utilisateurs : inscription, activation, authentification.

Le mot de passe en clair n'existe que le temps de la requete : il est
valide, hache (bcrypt, dans un thread pour ne pas bloquer la boucle),
puis oublie. Les jetons sont remis une seule fois a l'appelant ou
envoyes par email en tache de fond.
"""

import asyncio
from datetime import timedelta

from loguru import logger

from cinestore.core.entities.permission import PERMISSION_MOVIES_READ
from cinestore.core.entities.token import (
    SCOPE_ACTIVATION,
    SCOPE_AUTHENTICATION,
    Token,
    validate_token_plaintext,
)
from cinestore.core.entities.user import (
    BCRYPT_COST,
    User,
    validate_email,
    validate_password_plaintext,
    validate_user,
)
from cinestore.core.errors import (
    AuthenticationRequiredError,
    InactiveAccountError,
    InvalidCredentialsError,
    NotPermittedError,
    RecordNotFoundError,
    ValidationFailure,
)
from cinestore.core.ports.mailer import IMailer
from cinestore.core.ports.repositories import (
    IPermissionRepository,
    ITokenRepository,
    IUserRepository,
)
from cinestore.core.validator import Validator
from cinestore.services.background import BackgroundTasks

WELCOME_TEMPLATE = "user_welcome.html"

# Permissions attribuees a tout nouvel utilisateur
DEFAULT_PERMISSIONS = (PERMISSION_MOVIES_READ,)


class UserService:
    """
    Cas d'utilisation des comptes.

    Example:
        service = UserService(users, tokens, permissions, mailer, background)
        user = await service.register("Alice", "alice@example.com", "pa55word")
        await service.activate(token_plaintext)
        token = await service.create_authentication_token("alice@example.com", "pa55word")
    """

    def __init__(
        self,
        user_repo: IUserRepository,
        token_repo: ITokenRepository,
        permission_repo: IPermissionRepository,
        mailer: IMailer,
        background: BackgroundTasks,
        activation_ttl: timedelta = timedelta(minutes=3),
        authentication_ttl: timedelta = timedelta(hours=24),
        bcrypt_cost: int = BCRYPT_COST,
    ) -> None:
        self._user_repo = user_repo
        self._token_repo = token_repo
        self._permission_repo = permission_repo
        self._mailer = mailer
        self._background = background
        self._activation_ttl = activation_ttl
        self._authentication_ttl = authentication_ttl
        self._bcrypt_cost = bcrypt_cost

    async def register(self, name: str, email: str, password: str) -> User:
        """
        Inscrit un utilisateur non active et lui envoie son jeton d'activation.

        Raises:
            ValidationFailure: Nom, email ou mot de passe invalide
            DuplicateEmailError: Email deja utilise
        """
        user = User(name=name, email=email, activated=False)
        user.password.plaintext = password

        v = Validator()
        validate_user(v, user)
        v.raise_if_invalid()

        await asyncio.to_thread(user.password.set, password, self._bcrypt_cost)
        user.password.forget_plaintext()

        await self._user_repo.insert(user)
        await self._permission_repo.add_for_user(user.id, *DEFAULT_PERMISSIONS)
        logger.info("Utilisateur inscrit", user_id=user.id)

        await self._send_activation_token(user)
        return user

    async def resend_activation_token(self, email: str) -> User:
        """
        Emet un nouveau jeton d'activation pour un compte non active.

        Raises:
            ValidationFailure: Email invalide, inconnu, ou compte deja active
        """
        v = Validator()
        validate_email(v, email)
        v.raise_if_invalid()

        try:
            user = await self._user_repo.get_by_email(email)
        except RecordNotFoundError:
            raise ValidationFailure([("email", "no matching email address found")]) from None

        if user.activated:
            raise ValidationFailure([("email", "user has already been activated")])

        await self._send_activation_token(user)
        return user

    async def activate(self, token_plaintext: str) -> User:
        """
        Active le compte porteur du jeton, puis invalide ses jetons d'activation.

        Raises:
            ValidationFailure: Jeton mal forme, inconnu ou expire
            EditConflictError: Le compte a ete modifie en parallele
        """
        v = Validator()
        validate_token_plaintext(v, token_plaintext)
        v.raise_if_invalid()

        try:
            user = await self._user_repo.get_for_token(SCOPE_ACTIVATION, token_plaintext)
        except RecordNotFoundError:
            raise ValidationFailure([("token", "invalid or expired activation token")]) from None

        user.activated = True
        await self._user_repo.update(user)
        await self._token_repo.delete_all_for_user(SCOPE_ACTIVATION, user.id)
        logger.info("Compte active", user_id=user.id)
        return user

    async def create_authentication_token(self, email: str, password: str) -> Token:
        """
        Echange email + mot de passe contre un jeton d'authentification.

        Raises:
            ValidationFailure: Email ou mot de passe mal forme
            InvalidCredentialsError: Email inconnu ou mot de passe incorrect
        """
        v = Validator()
        validate_email(v, email)
        validate_password_plaintext(v, password)
        v.raise_if_invalid()

        try:
            user = await self._user_repo.get_by_email(email)
        except RecordNotFoundError:
            raise InvalidCredentialsError() from None

        if not await asyncio.to_thread(user.password.matches, password):
            raise InvalidCredentialsError()

        return await self._token_repo.new(user.id, self._authentication_ttl, SCOPE_AUTHENTICATION)

    async def authenticate(self, token_plaintext: str) -> User:
        """
        Retrouve l'utilisateur d'un jeton d'authentification.

        Raises:
            AuthenticationRequiredError: Jeton mal forme, inconnu ou expire
        """
        v = Validator()
        validate_token_plaintext(v, token_plaintext)
        if not v.valid():
            raise AuthenticationRequiredError("invalid or missing authentication token")
        try:
            return await self._user_repo.get_for_token(SCOPE_AUTHENTICATION, token_plaintext)
        except RecordNotFoundError:
            raise AuthenticationRequiredError("invalid or missing authentication token") from None

    async def require_permission(self, user: User, code: str) -> None:
        """
        Verifie que l'utilisateur est active et detient la permission.

        Raises:
            InactiveAccountError: Compte non active
            NotPermittedError: Permission absente
        """
        if not user.activated:
            raise InactiveAccountError()
        permissions = await self._permission_repo.get_all_for_user(user.id)
        if not permissions.include(code):
            raise NotPermittedError(code)

    async def _send_activation_token(self, user: User) -> None:
        token = await self._token_repo.new(user.id, self._activation_ttl, SCOPE_ACTIVATION)
        data = {"activationToken": token.plaintext, "userID": user.id}
        recipient = user.email

        async def send_welcome() -> None:
            await self._mailer.send(recipient, WELCOME_TEMPLATE, data)

        self._background.run(send_welcome, name=f"activation-email-{user.id}")
