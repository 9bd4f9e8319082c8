"""
Application services layer (use cases).

Services orchestrate the domain logic to fulfill application use cases.
They coordinate between entities, ports, and external providers.

This layer contains:
- Provider search dispatch and multi-source aggregation
- Import, bulk import and sync of provider records into the catalog
- Sample data seeding

Services depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.
"""

from .catalog_seeder import CatalogSeeder, SeedReport
from .external_import import (
    BulkImportReport,
    ExternalImportService,
    FailedItem,
    ImportedItem,
    SkippedItem,
)
from .external_search import (
    AggregatedSearchResult,
    ExternalSearchService,
    SourceOutcome,
    remove_duplicates,
)

__all__ = [
    "AggregatedSearchResult",
    "BulkImportReport",
    "CatalogSeeder",
    "ExternalImportService",
    "ExternalSearchService",
    "FailedItem",
    "ImportedItem",
    "SeedReport",
    "SkippedItem",
    "SourceOutcome",
    "remove_duplicates",
]
