"""
Fonctions utilitaires partagees dans le projet MovieInfo.

Ce module centralise les fonctions reutilisees a travers le codebase :
- title_key : cle de comparaison de titres (insensible a la casse)
- parse_year : extraction d'une annee depuis une date ou une plage
- parse_int / parse_number : conversion tolerante des chaines formatees
"""

import re
from typing import Any, Optional

_YEAR_PATTERN = re.compile(r"\d{4}")
_NUMBER_NOISE = re.compile(r"[^\d.\-]")


def title_key(title: Optional[str]) -> str:
    """Cle de comparaison d'un titre : casse normalisee, sans autre traitement."""
    return (title or "").lower()


def parse_year(value: Any) -> Optional[int]:
    """
    Extrait une annee depuis une valeur fournisseur.

    Accepte un entier, une date ISO ("2021-09-15") ou une plage ("2019–2021",
    premiere annee retenue). Retourne None si aucune annee n'est lisible.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = _YEAR_PATTERN.search(str(value))
    return int(match.group()) if match else None


def parse_number(value: Any) -> Optional[float]:
    """
    Convertit une valeur formatee en nombre.

    Retire symboles monetaires, separateurs de milliers et suffixes d'unite
    ("$1,234,567" -> 1234567.0, "155 min" -> 155.0). None si illisible.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = _NUMBER_NOISE.sub("", str(value))
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_int(value: Any) -> Optional[int]:
    """Comme parse_number, tronque a l'entier."""
    number = parse_number(value)
    return int(number) if number is not None else None
