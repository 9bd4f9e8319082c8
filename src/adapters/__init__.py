"""
Couche adaptateurs.

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- api/ : Clients des fournisseurs externes (TMDB, OMDB, RapidAPI) et normalisation

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
Cela permet de changer les implémentations sans affecter la logique métier.
"""
