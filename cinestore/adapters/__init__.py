"""Adapters : implementations concretes des ports externes (envoi d'emails)."""
