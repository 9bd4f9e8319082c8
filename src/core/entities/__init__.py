"""
Business entities representing core domain concepts.

Entities are mutable objects with identity that persist over time.
They encapsulate business rules and behavior.

Exports:
- Movie: Movie stored in the local catalog
- invariant_errors: Checks a movie against the catalog invariants
- normalize_title: Title normalization applied on every write
"""

from src.core.entities.movie import Movie, invariant_errors, normalize_title

__all__ = [
    "Movie",
    "invariant_errors",
    "normalize_title",
]
