"""
CineStore - Catalogue de films et gestion des utilisateurs.

Ce package fournit une couche d'acces aux donnees a concurrence optimiste
(films et utilisateurs) et les jetons porteurs servant a activer et
authentifier les comptes.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur, erreurs)
- services/ : Couche application (cas d'utilisation)
- infrastructure/ : Persistance SQLModel
- adapters/ : Envoi d'emails
- web/ : API HTTP FastAPI
"""

__version__ = "1.0.0"
