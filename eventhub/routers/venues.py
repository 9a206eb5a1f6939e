from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from eventhub.dependencies import get_template_venue_service
from eventhub.schemas.venue import TemplateVenueRead
from eventhub.services import TemplateVenueService

router = APIRouter()


@router.get("/templates", response_model=list[TemplateVenueRead])
async def list_template_venues(service: TemplateVenueService = Depends(get_template_venue_service)):
    return await service.list_template_venues()


@router.post("/templates", status_code=status.HTTP_201_CREATED)
async def create_template_venue(
    payload: dict[str, Any] = Body(...),
    service: TemplateVenueService = Depends(get_template_venue_service),
):
    venue_id = await service.create_template_venue(payload)
    return {"success": True, "id": venue_id}


@router.put("/templates/{venue_id}")
async def update_template_venue(
    venue_id: str,
    payload: dict[str, Any] = Body(...),
    service: TemplateVenueService = Depends(get_template_venue_service),
):
    await service.update_template_venue(venue_id, payload)
    return {"success": True}


@router.delete("/templates/{venue_id}")
async def delete_template_venue(
    venue_id: str, service: TemplateVenueService = Depends(get_template_venue_service)
):
    await service.delete_template_venue(venue_id)
    return {"success": True}
