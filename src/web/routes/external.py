"""
Routes des fournisseurs externes.

Recherche (une source ou agregee), fiche detaillee, import unitaire,
import en masse et synchronisation d'un film local.
"""

from typing import Annotated, Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from ...core.ports.api_clients import ProviderSearchResult
from ...services.external_import import ExternalImportService
from ...services.external_search import AggregatedSearchResult, ExternalSearchService
from ..deps import get_import_service, get_search_service
from ..schemas import BulkImportRequest, ImportRequest, SyncRequest, camelize, envelope, movie_payload

router = APIRouter(prefix="/external", tags=["external"])

SearchService = Annotated[ExternalSearchService, Depends(get_search_service)]
ImportService = Annotated[ExternalImportService, Depends(get_import_service)]


def aggregated_payload(result: AggregatedSearchResult) -> dict[str, Any]:
    """Forme JSON d'une recherche agregee : un bloc par source, puis la liste combinee."""
    return {
        "query": result.query,
        "sources": {
            outcome.source: camelize(outcome.result) if outcome.succeeded else {"error": outcome.error}
            for outcome in result.outcomes
        },
        "combined": camelize(result.combined),
    }


@router.get("/search")
async def search_external(
    search_service: SearchService,
    query: Optional[str] = None,
    source: Optional[str] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    year: Optional[int] = None,
    exclude_tmdb: Annotated[bool, Query(alias="excludeTMDB")] = False,
    exclude_omdb: Annotated[bool, Query(alias="excludeOMDB")] = False,
    exclude_rapidapi: Annotated[bool, Query(alias="excludeRapidAPI")] = False,
):
    """Recherche sur une source, ou sur toutes si source est absente ou 'all'."""
    if not query or not query.strip():
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Search query is required")

    excluded = {
        name
        for name, flag in (("tmdb", exclude_tmdb), ("omdb", exclude_omdb), ("rapidapi", exclude_rapidapi))
        if flag
    }
    result = await search_service.search(
        query.strip(), source=source, page=page, year=year, exclude=excluded
    )

    if isinstance(result, ProviderSearchResult):
        return envelope(data=camelize(result))
    return envelope(data=aggregated_payload(result))


@router.get("/details/{source}/{external_id}")
async def external_details(source: str, external_id: str, search_service: SearchService):
    detail = await search_service.get_details(source, external_id)
    return envelope(data=camelize(detail))


@router.post("/import", status_code=status.HTTP_201_CREATED)
async def import_movie(payload: ImportRequest, import_service: ImportService):
    """Importe un film ; 409 s'il existe deja et que overwrite n'est pas demande."""
    if not payload.source or payload.external_id in (None, ""):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Source and external ID are required")

    movie, _ = await import_service.import_movie(
        payload.source,
        str(payload.external_id),
        overwrite=payload.overwrite,
    )
    return envelope(
        message=f"Movie imported successfully from {payload.source.upper()}",
        data=movie_payload(movie),
    )


@router.post("/bulk-import")
async def bulk_import(payload: BulkImportRequest, import_service: ImportService):
    if not payload.search_query:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Search query is required for bulk import")

    report = await import_service.bulk_import(
        payload.search_query,
        source=payload.source,
        limit=payload.limit,
    )
    return envelope(
        message=report.summary,
        data={
            "successful": camelize(report.successful),
            "skipped": camelize(report.skipped),
            "failed": camelize(report.failed),
        },
    )


@router.put("/sync/{movie_id}")
async def sync_movie(
    movie_id: str,
    import_service: ImportService,
    payload: Annotated[Optional[SyncRequest], Body()] = None,
):
    """Rafraichit un film local depuis sa correspondance exacte (titre, annee)."""
    source = payload.source if payload else "tmdb"
    movie = await import_service.sync_movie(movie_id, source=source)
    return envelope(
        message=f"Movie synced successfully with {source.upper()}",
        data=movie_payload(movie),
    )
