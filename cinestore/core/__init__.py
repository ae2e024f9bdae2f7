"""
Couche domaine (core).

Contient les entites metier, les ports (interfaces abstraites), les objets
valeur, le moteur de validation et la taxonomie des erreurs.
Cette couche n'a AUCUNE dependance vers l'infrastructure (BDD, web).
"""
