"""
MovieInfo - API REST de catalogue de films.

Ce package expose un catalogue local de films (CRUD, recherche, statistiques)
et agrege les metadonnees de trois fournisseurs externes (TMDB, OMDB, RapidAPI)
avec import et synchronisation vers le catalogue.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur, exceptions)
- services/ : Couche application (agregation, import/synchronisation)
- adapters/ : Clients API externes et normalisation des reponses
- infrastructure/ : Persistance SQLModel
- web/ : Interface REST FastAPI
"""
