from .enrichment_service import EnrichmentService
from .metadata_service import MetadataService, PageEnrichment

__all__ = ['EnrichmentService', 'MetadataService', 'PageEnrichment']
