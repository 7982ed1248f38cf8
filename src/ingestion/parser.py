"""Fetch a conference web page and extract structured details with an LLM."""

import logging
import re
from datetime import date, timedelta
from urllib.parse import urlparse

import json_repair
import requests

from src.config import (
    CONFERENCE_EXTRACTION_PROMPT,
    DEFAULT_MODEL,
    HTTP_TIMEOUT_SECONDS,
    INGEST_HTML_LIMIT,
    INGEST_PLACEHOLDER_DAYS,
    INGEST_USER_AGENT,
)
from src.ingestion.results import ConferenceFields, ParsedConference, FallbackStub, IngestionFailed
from src.llm import generate_with_llm
from src.utils import parse_date, to_iso_date

logger = logging.getLogger(__name__)


class PageFetchError(Exception):
    """The conference page could not be downloaded."""


def derive_name_from_url(url: str) -> str:
    """Best-guess conference name from the URL's hostname."""
    try:
        hostname = (urlparse(url).hostname or "").lower()
    except ValueError:
        return "Conference"
    if not hostname:
        return "Conference"
    if "iitsec" in hostname:
        return "I/ITSEC"
    domain_name = hostname.replace("www.", "").split(".")[0]
    return re.sub(r"[^A-Z0-9]", "", domain_name.upper()) or "Conference"


def fetch_conference_page(url: str, http=requests) -> str:
    """Download the page HTML, following redirects."""
    try:
        response = http.get(
            url,
            headers={
                "User-Agent": INGEST_USER_AGENT,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.5",
            },
            allow_redirects=True,
            timeout=HTTP_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise PageFetchError(str(e)) from e
    if not response.ok:
        raise PageFetchError(f"HTTP {response.status_code}: {response.reason}")
    return response.text


def build_extraction_prompt(html: str, today: date) -> str:
    """Extraction prompt with current-date context for year inference."""
    return CONFERENCE_EXTRACTION_PROMPT.format(
        current_month=today.strftime("%B"),
        current_day=today.day,
        current_year=today.year,
        next_year=today.year + 1,
        html=html[:INGEST_HTML_LIMIT],
    )


def _parse_llm_json(text: str) -> dict:
    """Parse model output, tolerating markdown fences and malformed JSON."""
    text = (text or "").strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1].rsplit("```", 1)[0].strip()
    data = json_repair.loads(text)
    return data if isinstance(data, dict) else {}


def _clean_date(value) -> str | None:
    parsed = parse_date(value) if isinstance(value, str) else None
    return to_iso_date(parsed) if parsed else None


def fields_from_extraction(data: dict, url: str, today: date) -> ConferenceFields:
    """Normalize extracted data, filling missing name/dates with placeholders."""
    name = (data.get("name") or "").strip()
    start_date = _clean_date(data.get("start_date"))
    end_date = _clean_date(data.get("end_date"))
    description = data.get("short_description")

    if not name or not start_date or not end_date:
        logger.info("Extraction incomplete for %s; filling placeholders", url)
        name = name or derive_name_from_url(url)
        start_date = start_date or to_iso_date(today)
        end_date = end_date or to_iso_date(today + timedelta(days=INGEST_PLACEHOLDER_DAYS))
        description = description or (
            f"Conference imported from {urlparse(url).hostname}. "
            "Date information may need to be updated manually."
        )
        if not data.get("tags"):
            data["tags"] = ["conference", "imported"]

    if end_date < start_date:
        end_date = start_date

    tags = data.get("tags") or []
    if isinstance(tags, str):
        tags = [t.strip() for t in tags.split(",") if t.strip()]

    return ConferenceFields(
        name=name,
        start_date=start_date,
        end_date=end_date,
        location=data.get("location"),
        short_description=description,
        tags=[str(t) for t in tags],
        venue=data.get("venue") or None,
        registration_url=data.get("registration_url") or None,
    )


def extract_conference_fields(html: str, url: str, model: str = None, today: date = None):
    """Run the extraction prompt over page HTML.

    Returns ParsedConference, or IngestionFailed when the model errors or
    returns nothing usable.
    """
    today = today or date.today()
    model = model or DEFAULT_MODEL
    try:
        response_text = generate_with_llm(build_extraction_prompt(html, today), model, json_output=True)
    except Exception as e:
        logger.error("AI parsing failed for %s: %s", url, e)
        return IngestionFailed(reason=f"AI parsing failed: {e}")

    data = _parse_llm_json(response_text)
    if not data:
        return IngestionFailed(
            reason="AI could not extract structured data from the page. "
                   "The website might not contain clear conference information."
        )
    return ParsedConference(fields=fields_from_extraction(data, url, today), raw=data)


def parse_conference_page(url: str, model: str = None, http=requests, today: date = None):
    """Fetch and parse `url`.

    Returns ParsedConference, FallbackStub (page unreachable) or
    IngestionFailed (model error or no usable output).
    """
    try:
        html = fetch_conference_page(url, http=http)
    except PageFetchError as e:
        logger.warning("Fetch failed for %s, creating fallback stub: %s", url, e)
        return FallbackStub(fields=ConferenceFields(name=derive_name_from_url(url), tags=["conference"]), details=str(e))

    logger.info("Fetched %d characters from %s", len(html), url)
    return extract_conference_fields(html, url, model=model, today=today)
