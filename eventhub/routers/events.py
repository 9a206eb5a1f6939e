from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.dependencies import get_event_service, get_session
from eventhub.schemas.event import (
    CreateEventResponse,
    EventDetail,
    EventFilter,
    EventRead,
    EventSummary,
    OperationResponse,
)
from eventhub.services import EventVenueService, OperationResult
from eventhub.services.event_queries import list_events

router = APIRouter()


def _operation_response(result: OperationResult) -> OperationResponse:
    return OperationResponse(
        success=result.success,
        warnings=[f"{step.step}: {step.error}" for step in result.advisories],
    )


@router.get("/", response_model=list[EventSummary])
async def list_events_endpoint(
    session: AsyncSession = Depends(get_session),
    name: str | None = Query(default=None),
    sport: str | None = Query(default=None),
):
    return await list_events(session, EventFilter(name=name, sport=sport))


@router.post(
    "/",
    response_model=CreateEventResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_event_endpoint(
    payload: dict[str, Any] = Body(...),
    service: EventVenueService = Depends(get_event_service),
):
    result = await service.create_event(payload)
    if result.warning is not None:
        return CreateEventResponse(
            event_id=result.event_id,
            venues_warning=True,
            warning=result.warning.message,
        )
    return CreateEventResponse(event_id=result.event_id)


@router.get("/{event_id}", response_model=EventDetail)
async def get_event_endpoint(event_id: str, service: EventVenueService = Depends(get_event_service)):
    return await service.get_event_details(event_id)


@router.get("/{event_id}/edit", response_model=EventRead)
async def get_event_for_edit_endpoint(
    event_id: str, service: EventVenueService = Depends(get_event_service)
):
    return await service.get_event_for_edit(event_id)


@router.put("/{event_id}", response_model=OperationResponse)
async def update_event_endpoint(
    event_id: str,
    payload: dict[str, Any] = Body(...),
    service: EventVenueService = Depends(get_event_service),
):
    return _operation_response(await service.update_event(event_id, payload))


@router.delete("/{event_id}", response_model=OperationResponse)
async def delete_event_endpoint(event_id: str, service: EventVenueService = Depends(get_event_service)):
    return _operation_response(await service.delete_event(event_id))
