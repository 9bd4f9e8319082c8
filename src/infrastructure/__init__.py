"""
Couche infrastructure de MovieInfo.

Ce module contient les implementations concretes des interfaces definies
dans la couche domaine (ports). Il gere les preoccupations techniques :

- persistence/ : Stockage SQLite avec SQLModel (modele, requetes et repository)

Architecture hexagonale : les adapters ici implementent les ports du domaine,
permettant de changer l'implementation (ex: PostgreSQL au lieu de SQLite)
sans modifier la logique metier.
"""
