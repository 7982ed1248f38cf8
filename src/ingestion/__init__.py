# Ingestion layer - conference details from a website URL

from src.ingestion.results import (
    ConferenceFields,
    ParsedConference,
    FallbackStub,
    IngestionFailed,
    is_fallback,
)

from src.ingestion.parser import (
    PageFetchError,
    derive_name_from_url,
    fetch_conference_page,
    extract_conference_fields,
    parse_conference_page,
)

from src.ingestion.service import (
    ingest_conference_from_url,
    save_ingested_conference,
)

__all__ = [
    # Results
    "ConferenceFields",
    "ParsedConference",
    "FallbackStub",
    "IngestionFailed",
    "is_fallback",
    # Parser
    "PageFetchError",
    "derive_name_from_url",
    "fetch_conference_page",
    "extract_conference_fields",
    "parse_conference_page",
    # Service
    "ingest_conference_from_url",
    "save_ingested_conference",
]
