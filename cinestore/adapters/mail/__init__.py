"""Envoi des emails transactionnels (SMTP + templates jinja2)."""

from cinestore.adapters.mail.mailer import SMTPMailer, TemplateRenderer, with_mail_retry

__all__ = ["SMTPMailer", "TemplateRenderer", "with_mail_retry"]
