"""Interface port pour l'envoi d'emails transactionnels."""

from abc import ABC, abstractmethod
from typing import Any


class IMailer(ABC):
    """Rendu d'un template et livraison a un destinataire."""

    @abstractmethod
    async def send(self, recipient: str, template_name: str, data: dict[str, Any]) -> None:
        """
        Envoie l'email rendu depuis template_name avec data.

        Leve l'erreur de transport une fois les tentatives epuisees.
        """
        ...
