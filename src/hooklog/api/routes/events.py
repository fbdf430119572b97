"""Read endpoint for the in-memory delivery log."""

from fastapi import APIRouter

from hooklog.dependencies import AppSettings, EventLog
from hooklog.errors.exceptions import AuthenticationError
from hooklog.models.delivery import EventsPage
from hooklog.services.signatures import timing_safe_equal

router = APIRouter(tags=["Events"])


@router.get("/events", response_model=EventsPage)
async def list_events(
    store: EventLog,
    settings: AppSettings,
    token: str | None = None,
    limit: int | None = None,
    event: str | None = None,
) -> EventsPage:
    """Return the total stored count and the most recent deliveries.

    When an events token is configured the ``token`` query parameter must
    match it. ``limit`` is clamped to the configured page size.
    """
    if settings.events_token and not (token and timing_safe_equal(token, settings.events_token)):
        raise AuthenticationError("Unauthorized")

    page_size = settings.events_page_size
    limit = page_size if limit is None else max(0, min(limit, page_size))

    if event:
        records = store.snapshot()
        matching = [r for r in records if r.event_type == event]
        return EventsPage(count=len(records), events=matching[:limit])

    records, total = store.peek(limit)
    return EventsPage(count=total, events=records)
