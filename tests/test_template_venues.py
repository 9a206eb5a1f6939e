"""Tests for template venue management."""
import pytest

from eventhub.core.errors import AuthError, NotFoundError, ValidationError
from eventhub.services import EventVenueService, TemplateVenueService

ARENA = {"name": "Arena", "address": "9 Elm St", "city": "Capital City", "state": "IL", "capacity": "1200"}


@pytest.fixture
def venues(test_session, owner):
    return TemplateVenueService(test_session, owner)


@pytest.mark.asyncio
async def test_create_and_list_template_venues(venues):
    venue_id = await venues.create_template_venue(ARENA)
    await venues.create_template_venue(dict(ARENA, name="Ballpark"))

    listed = await venues.list_template_venues()
    assert [venue.name for venue in listed] == ["Arena", "Ballpark"]
    assert listed[0].id == venue_id
    assert listed[0].capacity == 1200


@pytest.mark.asyncio
async def test_event_venues_are_not_templates(venues, test_session, owner, settings, derby_payload):
    await EventVenueService(test_session, owner, settings).create_event(derby_payload)
    assert await venues.list_template_venues() == []


@pytest.mark.asyncio
async def test_update_template_venue(venues):
    venue_id = await venues.create_template_venue(ARENA)
    await venues.update_template_venue(venue_id, dict(ARENA, capacity=50))
    (venue,) = await venues.list_template_venues()
    assert venue.capacity == 50


@pytest.mark.asyncio
async def test_event_attached_venue_cannot_be_edited_directly(
    venues, test_session, owner, settings, derby_payload
):
    service = EventVenueService(test_session, owner, settings)
    created = await service.create_event(derby_payload)
    event = await service.get_event_for_edit(created.event_id)
    attached_id = event.venues[0].id

    with pytest.raises(NotFoundError):
        await venues.update_template_venue(attached_id, ARENA)
    with pytest.raises(NotFoundError):
        await venues.delete_template_venue(attached_id)

    # Deleting a venue never touches the event
    assert (await service.get_event_for_edit(created.event_id)).venues[0].id == attached_id


@pytest.mark.asyncio
async def test_delete_template_venue(venues):
    venue_id = await venues.create_template_venue(ARENA)
    await venues.delete_template_venue(venue_id)
    assert await venues.list_template_venues() == []
    with pytest.raises(NotFoundError):
        await venues.delete_template_venue(venue_id)


@pytest.mark.asyncio
async def test_template_writes_require_user(test_session):
    anonymous = TemplateVenueService(test_session, None)
    with pytest.raises(AuthError):
        await anonymous.create_template_venue(ARENA)
    with pytest.raises(AuthError):
        await anonymous.update_template_venue("v", ARENA)
    with pytest.raises(AuthError):
        await anonymous.delete_template_venue("v")
    assert await anonymous.list_template_venues() == []


@pytest.mark.asyncio
async def test_template_venue_validation(venues):
    with pytest.raises(ValidationError) as exc_info:
        await venues.create_template_venue(dict(ARENA, capacity=0))
    assert exc_info.value.fields == {"capacity": ["Capacity must be at least 1"]}
