"""FastAPI routes for translating canonical calls into `_kmq` commands."""
import logging
import uuid
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from ..adapter.collector import InMemoryCollector, StaticLoader
from ..adapter.facade import KISSmetricsAdapter
from ..adapter.queue import CommandQueue
from ..config import AdapterOptions, load_options, load_skip_page_view
from ..schemas.events import Alias, CanonicalCall, Identify, Page, Track
from .auth import require_api_key


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["translate"])


class TranslateRequest(BaseModel):
    """Batch of canonical calls to run through a fresh adapter."""

    calls: list[CanonicalCall] = Field(
        ..., description="Canonical calls in the order they happened (non-empty)"
    )
    options: Optional[AdapterOptions] = Field(
        None, description="Option overrides; KISSMETRICS_* env vars when omitted"
    )
    user_agent: str = Field("", description="Browser user agent for the session")
    initial_page: Optional[Page] = Field(
        None, description="Page context translated when the collector loads"
    )
    skip_page_view: Optional[bool] = Field(
        None, description="Suppress collector page views; KM_SKIP_PAGE_VIEW when omitted"
    )


class TranslateResponse(BaseModel):
    """Queue contents after the in-memory collector drained them."""

    request_id: str = Field(..., description="Server-generated request ID")
    commands: list[list[Any]] = Field(
        ..., description="Queued commands as [verb, *args], in delivery order"
    )
    objects: list[dict] = Field(
        ..., description="Objects handed to the collector setter by deferred units"
    )
    page_views: int = Field(..., description="Collector page views requested")
    queue_depth: int = Field(..., description="Total queue entries appended")


def _dispatch(adapter: KISSmetricsAdapter, call: Any) -> None:
    if isinstance(call, Page):
        adapter.page(call)
    elif isinstance(call, Identify):
        adapter.identify(call)
    elif isinstance(call, Track):
        adapter.track(call)
    elif isinstance(call, Alias):
        adapter.alias(call)
    else:
        raise TypeError(f"Unsupported call: {type(call).__name__}")


def run_calls(
    calls: list,
    options: AdapterOptions,
    user_agent: str = "",
    initial_page: Optional[Page] = None,
    skip_page_view: bool = False,
) -> tuple[CommandQueue, InMemoryCollector]:
    """Initialize an adapter, apply the calls, and drain the queue."""
    collector = InMemoryCollector()
    queue = CommandQueue()
    adapter = KISSmetricsAdapter(
        loader=StaticLoader(collector),
        options=options,
        queue=queue,
        user_agent=user_agent,
        skip_page_view=skip_page_view,
    )
    adapter.initialize(initial_page)

    for call in calls:
        _dispatch(adapter, call)

    collector.drain(queue)
    return queue, collector


@router.post(
    "/translate",
    response_model=TranslateResponse,
    dependencies=[Depends(require_api_key)],
    summary="Translate canonical analytics calls",
    description=(
        "Run canonical page/identify/track/alias calls through the KISSmetrics "
        "adapter and return the resulting queue commands and line-item objects."
    ),
)
async def translate_calls(payload: TranslateRequest) -> TranslateResponse:
    """Translate a batch of calls.

    Validates:
    - API key (X-KMQ-API-KEY header) - returns 401 if missing/invalid
    - calls list is non-empty
    - KISSMETRICS_* environment flags parse when no overrides are sent
      (OptionsError is served as 500 by the app error handler)
    """
    if not payload.calls:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="calls must be non-empty",
        )

    options = payload.options or load_options()
    skip_page_view = (
        payload.skip_page_view
        if payload.skip_page_view is not None
        else load_skip_page_view()
    )

    request_id = str(uuid.uuid4())
    queue, collector = run_calls(
        payload.calls,
        options,
        user_agent=payload.user_agent,
        initial_page=payload.initial_page,
        skip_page_view=skip_page_view,
    )

    logger.info(
        "Translated request_id=%s: calls=%s, commands=%s, objects=%s",
        request_id,
        len(payload.calls),
        len(collector.commands),
        len(collector.objects),
    )

    return TranslateResponse(
        request_id=request_id,
        commands=[list(command) for command in collector.commands],
        objects=collector.objects,
        page_views=collector.page_views,
        queue_depth=len(queue),
    )
