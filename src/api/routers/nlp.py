import asyncio
import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api import dependencies
from api.dependencies import get_parser, get_settings_store
from api.metrics import FIELDS_EXTRACTED_TOTAL, REQUESTS_TOTAL, REQUEST_LATENCY_SECONDS
from extraction.natural_language_parser import NaturalLanguageParser
from storage.settings_store import SettingsStore
from tasknotes_nlp.models import ExtractionConfig, ParsedTaskData

router = APIRouter()
logger = logging.getLogger(__name__)

DEFAULT_STATUS = "open"

_COUNTED_FIELDS = (
    "details",
    "due_date",
    "due_time",
    "scheduled_date",
    "scheduled_time",
    "priority",
    "status",
    "recurrence",
    "estimate",
)


class TextIn(BaseModel):
    text: str


def _when(date: Optional[str], time_of_day: Optional[str]) -> Optional[str]:
    if not date:
        return None
    return f"{date} {time_of_day}" if time_of_day else date


def to_task_data(parsed: ParsedTaskData) -> dict:
    """Shape a parse result the way task creation expects it."""
    task = {
        "title": parsed.title,
        "details": parsed.details,
        "priority": parsed.priority,
        "status": parsed.status or DEFAULT_STATUS,
        "tags": parsed.tags,
        "contexts": parsed.contexts,
        "recurrence": parsed.to_rrule(),
        "timeEstimate": parsed.estimate,
        "due": _when(parsed.due_date, parsed.due_time),
        "scheduled": _when(parsed.scheduled_date, parsed.scheduled_time),
    }
    return {k: v for k, v in task.items() if v is not None}


def _count_fields(parsed: ParsedTaskData) -> None:
    try:
        for name in _COUNTED_FIELDS:
            if getattr(parsed, name) is not None:
                FIELDS_EXTRACTED_TOTAL.labels(field=name).inc()
        if parsed.tags:
            FIELDS_EXTRACTED_TOTAL.labels(field="tags").inc()
        if parsed.contexts:
            FIELDS_EXTRACTED_TOTAL.labels(field="contexts").inc()
    except Exception:
        pass


async def _parse(endpoint: str, text: str, parser: NaturalLanguageParser) -> ParsedTaskData:
    if not text.strip():
        REQUESTS_TOTAL.labels(endpoint=endpoint, status="rejected").inc()
        raise HTTPException(status_code=400, detail="Text field is required and must be a string")

    try:
        parsed = await asyncio.to_thread(parser.parse_input, text)
    except (TypeError, ValueError) as e:
        logger.info(f"Rejected NLP input: {e}")
        REQUESTS_TOTAL.labels(endpoint=endpoint, status="rejected").inc()
        raise HTTPException(status_code=400, detail=str(e))

    REQUESTS_TOTAL.labels(endpoint=endpoint, status="ok").inc()
    return parsed


@router.post("/api/nlp/parse")
async def parse_text(
    payload: TextIn,
    parser: NaturalLanguageParser = Depends(get_parser),
) -> dict:
    start = time.time()
    logger.info(f"Parsing NLP input: {payload.text[:50]}...")

    parsed = await _parse("/api/nlp/parse", payload.text, parser)
    _count_fields(parsed)
    REQUEST_LATENCY_SECONDS.labels(endpoint="/api/nlp/parse").observe(time.time() - start)

    return {
        "parsed": parsed.model_dump(by_alias=True, exclude_none=True),
        "taskData": to_task_data(parsed),
    }


@router.post("/api/nlp/preview")
async def preview_text(
    payload: TextIn,
    parser: NaturalLanguageParser = Depends(get_parser),
) -> dict:
    start = time.time()

    parsed = await _parse("/api/nlp/preview", payload.text, parser)
    items = parser.get_preview_data(parsed)
    REQUEST_LATENCY_SECONDS.labels(endpoint="/api/nlp/preview").observe(time.time() - start)

    return {
        "items": [{"icon": item.icon, "text": item.text} for item in items],
        "text": parser.get_preview_text(parsed),
    }


@router.get("/api/nlp/settings")
async def get_settings(parser: NaturalLanguageParser = Depends(get_parser)) -> dict:
    return parser.config.model_dump(by_alias=True)


@router.put("/api/nlp/settings")
async def update_settings(
    payload: ExtractionConfig,
    store: SettingsStore = Depends(get_settings_store),
) -> dict:
    """Persist new vocabularies/defaults and rebuild the parser from them."""
    try:
        await asyncio.to_thread(store.save, payload)
    except OSError as e:
        logger.error(f"Failed to save NLP settings: {e}")
        raise HTTPException(status_code=500, detail="Failed to save settings")

    parser = dependencies.rebuild_parser(payload)
    logger.info(
        f"NLP settings updated: {len(payload.status_configs)} statuses, "
        f"{len(payload.priority_configs)} priorities"
    )
    return {"status": "updated", "settings": parser.config.model_dump(by_alias=True)}
