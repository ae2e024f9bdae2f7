"""Couche infrastructure : persistance SQLModel."""
