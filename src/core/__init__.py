"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), objets valeur et exceptions.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entité métier (Movie)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (MovieQuery, Pagination)
- exceptions.py : Erreurs métier traduites en réponses par la couche web
"""
