"""
Envoi des emails transactionnels par SMTP.

Chaque template jinja2 definit trois blocs : subject, plain_body et
html_body. Le message est envoye en multipart (texte + HTML).

L'envoi est retente un nombre fixe de fois avec une pause fixe, puis
l'erreur est propagee a l'appelant (qui la journalise).

Usage:
    mailer = SMTPMailer(host="smtp.example.com", port=2525, sender="CineStore <no-reply@example.com>")
    await mailer.send("alice@example.com", "user_welcome.html", {"activationToken": "...", "userID": 1})
"""

import asyncio
import smtplib
from email.message import EmailMessage
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from cinestore.core.ports.mailer import IMailer

TEMPLATES_DIR = Path(__file__).parent / "templates"

MAX_ATTEMPTS = 3
RETRY_PAUSE_SECONDS = 1.0


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Echec d'envoi d'email, nouvelle tentative",
        attempt=retry_state.attempt_number,
        error=str(exc),
    )


def with_mail_retry(max_attempts: int = MAX_ATTEMPTS, pause: float = RETRY_PAUSE_SECONDS):
    """
    Decorateur relancant un envoi en echec avec une pause fixe.

    Seules les erreurs de transport (SMTP, reseau) sont relancees.

    Args:
        max_attempts: Nombre total de tentatives (defaut: 3)
        pause: Pause entre deux tentatives en secondes (defaut: 1)
    """
    return retry(
        retry=retry_if_exception_type((smtplib.SMTPException, OSError)),
        wait=wait_fixed(pause),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


class TemplateRenderer:
    """Rend les blocs subject / plain_body / html_body d'un template."""

    def __init__(self, templates_dir: Path = TEMPLATES_DIR) -> None:
        self._env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
        )

    def render(self, template_name: str, data: dict[str, Any]) -> tuple[str, str, str]:
        """
        Retourne (sujet, corps texte, corps HTML).

        Raises:
            jinja2.TemplateNotFound: Template inexistant
            jinja2.UndefinedError: Variable manquante dans data
        """
        template = self._env.get_template(template_name)
        context = template.new_context(data)
        subject = "".join(template.blocks["subject"](context)).strip()
        plain_body = "".join(template.blocks["plain_body"](context)).strip()
        html_body = "".join(template.blocks["html_body"](context)).strip()
        return subject, plain_body, html_body


class SMTPMailer(IMailer):
    """
    Mailer SMTP.

    Sans hote configure, le message est rendu puis seulement journalise
    (mode developpement).
    """

    def __init__(
        self,
        host: Optional[str],
        port: int,
        sender: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 5.0,
        max_attempts: int = MAX_ATTEMPTS,
        retry_pause: float = RETRY_PAUSE_SECONDS,
        renderer: Optional[TemplateRenderer] = None,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._retry_pause = retry_pause
        self._renderer = renderer or TemplateRenderer()

    def build_message(self, recipient: str, template_name: str, data: dict[str, Any]) -> EmailMessage:
        subject, plain_body, html_body = self._renderer.render(template_name, data)
        msg = EmailMessage()
        msg["To"] = recipient
        msg["From"] = self._sender
        msg["Subject"] = subject
        msg.set_content(plain_body)
        msg.add_alternative(html_body, subtype="html")
        return msg

    def _deliver(self, msg: EmailMessage) -> None:
        """Envoi bloquant, execute dans un thread."""
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
            if self._username:
                smtp.starttls()
                smtp.login(self._username, self._password or "")
            smtp.send_message(msg)

    async def send(self, recipient: str, template_name: str, data: dict[str, Any]) -> None:
        msg = self.build_message(recipient, template_name, data)

        if self._host is None:
            logger.info("SMTP non configure, email non envoye", to=recipient, subject=msg["Subject"])
            return

        @with_mail_retry(max_attempts=self._max_attempts, pause=self._retry_pause)
        async def _send_with_retry() -> None:
            await asyncio.to_thread(self._deliver, msg)

        await _send_with_retry()
        logger.info("Email envoye", to=recipient, template=template_name)
