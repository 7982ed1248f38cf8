"""Tagged outcomes of parsing a conference web page."""

from dataclasses import dataclass, field

from src.config import FETCH_FAILED


@dataclass
class ConferenceFields:
    name: str
    start_date: str | None = None
    end_date: str | None = None
    location: str | None = None
    short_description: str | None = None
    tags: list = field(default_factory=list)
    venue: str | None = None
    registration_url: str | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "location": self.location,
            "short_description": self.short_description,
            "tags": list(self.tags or []),
            "venue": self.venue,
            "registration_url": self.registration_url,
        }


@dataclass
class ParsedConference:
    """The page was fetched and the model extracted the details."""
    fields: ConferenceFields
    raw: dict = field(default_factory=dict)


@dataclass
class FallbackStub:
    """The page could not be fetched; only a URL-derived name is known."""
    fields: ConferenceFields
    details: str

    @property
    def raw(self) -> dict:
        return {"error": FETCH_FAILED, "details": self.details}


@dataclass
class IngestionFailed:
    """Nothing usable; the reason is shown to the user."""
    reason: str


def is_fallback(response: dict) -> bool:
    """Whether a wire response is a fallback stub (raw.error == 'fetch_failed')."""
    return (response.get("raw") or {}).get("error") == FETCH_FAILED
