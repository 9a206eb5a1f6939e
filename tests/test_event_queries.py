"""Tests for the event list / filter queries."""
import pytest
import pytest_asyncio

from eventhub.core.errors import ValidationError
from eventhub.schemas.event import EventFilter
from eventhub.services import EventVenueService
from eventhub.services.event_queries import list_events


def _payload(name, sport, event_date, city="Springfield"):
    return {
        "name": name,
        "sportType": sport,
        "eventDate": event_date,
        "venues": [
            {"name": f"{name} Ground", "address": "1 Main St", "city": city, "state": "IL", "capacity": 100}
        ],
    }


@pytest_asyncio.fixture
async def seeded(test_session, owner, settings):
    service = EventVenueService(test_session, owner, settings)
    # Created out of date order on purpose
    await service.create_event(_payload("Fall Cup", "Tennis", "2025-10-01", city="Shelbyville"))
    await service.create_event(_payload("Spring Classic", "Football", "2025-04-01"))
    return service


@pytest.mark.asyncio
async def test_name_filter_is_case_insensitive_substring(test_session, seeded):
    for term in ("spring", "SPRING", "ring cla"):
        events = await list_events(test_session, EventFilter(name=term))
        assert [event.name for event in events] == ["Spring Classic"]


@pytest.mark.asyncio
async def test_sport_all_returns_everything_ordered_by_date(test_session, seeded):
    events = await list_events(test_session, EventFilter(sport="all"))
    assert [event.name for event in events] == ["Spring Classic", "Fall Cup"]


@pytest.mark.asyncio
async def test_sport_filter_is_exact(test_session, seeded):
    events = await list_events(test_session, {"sport": "Tennis"})
    assert [event.name for event in events] == ["Fall Cup"]
    assert await list_events(test_session, {"sport": "tennis"}) == []


@pytest.mark.asyncio
async def test_filters_combine(test_session, seeded):
    assert await list_events(test_session, {"name": "spring", "sport": "Tennis"}) == []
    events = await list_events(test_session, {"name": "cup", "sport": "Tennis"})
    assert [event.name for event in events] == ["Fall Cup"]


@pytest.mark.asyncio
async def test_no_filter_and_empty_name(test_session, seeded):
    assert len(await list_events(test_session)) == 2
    assert len(await list_events(test_session, {"name": "", "sport": ""})) == 2


@pytest.mark.asyncio
async def test_events_carry_normalized_venues(test_session, seeded):
    events = await list_events(test_session, {"name": "fall"})
    assert [venue.model_dump() for venue in events[0].venues] == [
        {"name": "Fall Cup Ground", "city": "Shelbyville", "state": "IL"}
    ]


@pytest.mark.asyncio
async def test_like_wildcards_are_literal(test_session, seeded):
    assert await list_events(test_session, {"name": "%"}) == []
    assert await list_events(test_session, {"name": "_"}) == []


@pytest.mark.asyncio
async def test_no_match_is_empty_list(test_session):
    assert await list_events(test_session, {"name": "nothing"}) == []


@pytest.mark.asyncio
async def test_invalid_filter_shape(test_session):
    with pytest.raises(ValidationError):
        await list_events(test_session, {"name": ["a", "b"]})
