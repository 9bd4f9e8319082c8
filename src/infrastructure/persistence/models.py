"""
Modeles SQLModel pour la base de donnees MovieInfo.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- movies: Films du catalogue

Les champs JSON (*_json) stockent les listes et le mapping des IDs externes
de maniere serialisee ; SQLite les interroge avec json_each / json_extract.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Horodatage UTC courant."""
    return datetime.now(timezone.utc)


class MovieModel(SQLModel, table=True):
    """
    Modele representant un film dans la base de donnees.

    Les champs *_json stockent des listes ou mappings serialises en JSON.
    """

    __tablename__ = "movies"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(index=True, max_length=200)
    genres_json: str = Field(default="[]")  # JSON: ["Science Fiction", "Adventure"]
    director: str = Field(index=True, max_length=100)
    release_year: int = Field(index=True)
    rating: float = Field(default=0.0, index=True)
    description: str | None = None
    duration: int | None = None  # Minutes
    poster: str | None = None
    cast_json: str = Field(default="[]")  # JSON: ["Acteur 1", "Acteur 2", ...]
    language: str | None = Field(default="English")
    country: str | None = None
    budget: float | None = None
    box_office: float | None = None
    external_ids_json: str = Field(default="{}")  # JSON: {"tmdb": "438631", "omdb": "tt1160419"}
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def genres(self) -> list[str]:
        """Retourne les genres deserialises."""
        return json.loads(self.genres_json) if self.genres_json else []

    @property
    def cast(self) -> list[str]:
        """Retourne les acteurs deserialises."""
        return json.loads(self.cast_json) if self.cast_json else []

    @property
    def external_ids(self) -> dict[str, str]:
        """Retourne les IDs externes deserialises."""
        return json.loads(self.external_ids_json) if self.external_ids_json else {}
