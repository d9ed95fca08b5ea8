"""
Integration tests for the reservation endpoints.
"""

import pytest
from typing import Dict
from httpx import AsyncClient
from fastapi import status

from tests.conftest import ReservationFactory, TEST_USERNAME

RESERVATIONS_URL = "/api/dibs/reservations"


async def create_reservation(client: AsyncClient, headers: Dict[str, str], **kwargs) -> dict:
    response = await client.post(
        RESERVATIONS_URL,
        json=ReservationFactory.create_reservation_data(**kwargs),
        headers=headers
    )
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


class TestReservationEndpoints:

    @pytest.mark.asyncio
    async def test_create_then_list(self, async_client: AsyncClient, auth_headers):
        created = await create_reservation(async_client, auth_headers)

        assert created["id"]
        assert created["username"] == TEST_USERNAME
        assert created["propertyName"] == "Cabin"
        assert created["start"] == "2026-11-01T15:00:00.000Z"
        assert created["end"] == "2026-11-03T11:00:00.000Z"

        response = await async_client.get(RESERVATIONS_URL, headers=auth_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == [created]

    @pytest.mark.asyncio
    async def test_submitted_fields_round_trip(self, async_client: AsyncClient, auth_headers):
        submitted = ReservationFactory.create_reservation_data(
            start="2018-05-01T00:00:00.000Z",
            end="2018-05-03T12:30:15.250Z"
        )

        response = await async_client.post(RESERVATIONS_URL, json=submitted, headers=auth_headers)

        assert response.status_code == status.HTTP_201_CREATED
        created = response.json()
        assert {field: created[field] for field in submitted} == submitted

    @pytest.mark.asyncio
    async def test_instant_without_fraction_gains_milliseconds(self, async_client: AsyncClient, auth_headers):
        created = await create_reservation(async_client, auth_headers, start="2026-11-01T15:00:00Z")

        assert created["start"] == "2026-11-01T15:00:00.000Z"

    @pytest.mark.asyncio
    async def test_offset_instant_normalized_to_utc(self, async_client: AsyncClient, auth_headers):
        created = await create_reservation(async_client, auth_headers, start="2026-11-01T10:00:00-05:00")

        assert created["start"] == "2026-11-01T15:00:00.000Z"

    @pytest.mark.asyncio
    async def test_overlapping_reservations_accepted(self, async_client: AsyncClient, auth_headers):
        await create_reservation(async_client, auth_headers)
        await create_reservation(async_client, auth_headers, username="someoneElse")

        response = await async_client.get(RESERVATIONS_URL, headers=auth_headers)
        assert len(response.json()) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["username", "propertyName", "start", "end"])
    async def test_missing_field(self, async_client: AsyncClient, auth_headers, field):
        body = ReservationFactory.create_reservation_data()
        del body[field]

        response = await async_client.post(RESERVATIONS_URL, json=body, headers=auth_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["message"] == "Missing field"
        assert response.json()["location"] == field

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["propertyName", "start", "end"])
    async def test_blank_field(self, async_client: AsyncClient, auth_headers, field):
        body = ReservationFactory.create_reservation_data()
        body[field] = " "

        response = await async_client.post(RESERVATIONS_URL, json=body, headers=auth_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["message"] == "Must be at least 1 characters long"
        assert response.json()["location"] == field

    @pytest.mark.asyncio
    async def test_unparseable_date(self, async_client: AsyncClient, auth_headers):
        response = await async_client.post(
            RESERVATIONS_URL,
            json=ReservationFactory.create_reservation_data(end="next tuesday"),
            headers=auth_headers
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["message"] == "Must be an ISO-8601 date"
        assert response.json()["location"] == "end"

        listing = await async_client.get(RESERVATIONS_URL, headers=auth_headers)
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_update(self, async_client: AsyncClient, auth_headers):
        created = await create_reservation(async_client, auth_headers)
        body = dict(created, end="2026-11-05T11:00:00.000Z")

        response = await async_client.put(f"{RESERVATIONS_URL}/{created['id']}", json=body, headers=auth_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        listing = await async_client.get(RESERVATIONS_URL, headers=auth_headers)
        assert listing.json()[0]["end"] == "2026-11-05T11:00:00.000Z"

    @pytest.mark.asyncio
    async def test_update_id_mismatch(self, async_client: AsyncClient, auth_headers):
        body = ReservationFactory.create_reservation_data()
        body["id"] = "456"

        response = await async_client.put(f"{RESERVATIONS_URL}/123", json=body, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "Request path id (123) and request body id (456) must match"

    @pytest.mark.asyncio
    async def test_delete(self, async_client: AsyncClient, auth_headers):
        created = await create_reservation(async_client, auth_headers)

        response = await async_client.delete(f"{RESERVATIONS_URL}/{created['id']}", headers=auth_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        listing = await async_client.get(RESERVATIONS_URL, headers=auth_headers)
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_requires_token(self, async_client: AsyncClient):
        response = await async_client.get(RESERVATIONS_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
