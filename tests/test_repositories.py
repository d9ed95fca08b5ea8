"""
Tests for repository classes.
Tests CRUD operations and user authentication against the test database.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from dibs.models.property import Property
from dibs.models.reservation import Reservation
from dibs.repositories.user import UserRepository
from dibs.repositories.property import PropertyRepository
from dibs.repositories.reservation import ReservationRepository
from dibs.utils.exceptions import ValidationError
from tests.conftest import UserFactory, PropertyFactory, ReservationFactory, TEST_PASSWORD


def property_attributes(**kwargs):
    return Property.attributes_from_api(PropertyFactory.create_property_data(**kwargs))


class TestBaseRepository:
    """Test base repository functionality through PropertyRepository."""

    @pytest.mark.asyncio
    async def test_create(self, property_repository: PropertyRepository):
        prop = await property_repository.create(property_attributes())

        assert prop.id is not None
        assert prop.name == "Cabin"
        assert prop.created_at is not None

    @pytest.mark.asyncio
    async def test_create_runs_model_validation(self, property_repository: PropertyRepository):
        with pytest.raises(ValidationError):
            await property_repository.create(property_attributes(state="ZZ"))

        assert await property_repository.get_all() == []

    @pytest.mark.asyncio
    async def test_create_missing_required_column_fails(self, property_repository: PropertyRepository):
        attributes = property_attributes()
        del attributes["city"]

        with pytest.raises(IntegrityError):
            await property_repository.create(attributes)

    @pytest.mark.asyncio
    async def test_get_by_id(self, property_repository: PropertyRepository):
        created = await property_repository.create(property_attributes())

        retrieved = await property_repository.get_by_id(created.id)

        assert retrieved is not None
        assert retrieved.id == created.id

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, property_repository: PropertyRepository):
        assert await property_repository.get_by_id("does-not-exist") is None

    @pytest.mark.asyncio
    async def test_get_all(self, property_repository: PropertyRepository):
        await property_repository.create(property_attributes(name="Cabin"))
        await property_repository.create(property_attributes(name="Loft"))

        records = await property_repository.get_all()

        assert sorted(record.name for record in records) == ["Cabin", "Loft"]

    @pytest.mark.asyncio
    async def test_update_sets_only_given_fields(self, property_repository: PropertyRepository):
        created = await property_repository.create(property_attributes())

        updated = await property_repository.update(created.id, {"name": "Chalet"})

        assert updated.name == "Chalet"
        assert updated.city == "Asheville"

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, property_repository: PropertyRepository):
        assert await property_repository.update("does-not-exist", {"name": "Chalet"}) is None

    @pytest.mark.asyncio
    async def test_update_runs_model_validation(self, property_repository: PropertyRepository):
        created = await property_repository.create(property_attributes())

        with pytest.raises(ValidationError):
            await property_repository.update(created.id, {"state": "ZZ"})

    @pytest.mark.asyncio
    async def test_delete(self, property_repository: PropertyRepository):
        created = await property_repository.create(property_attributes())

        assert await property_repository.delete(created.id) is True
        assert await property_repository.delete(created.id) is False
        assert await property_repository.get_by_id(created.id) is None


class TestReservationRepository:
    """Reservations are stored without conflict checks."""

    @pytest.mark.asyncio
    async def test_overlapping_reservations_both_stored(self, reservation_repository: ReservationRepository):
        data = ReservationFactory.create_reservation_data()

        await reservation_repository.create(Reservation.attributes_from_api(data))
        await reservation_repository.create(Reservation.attributes_from_api(data))

        assert len(await reservation_repository.get_all()) == 2


class TestUserRepository:
    """Test user registration and authentication."""

    @pytest.mark.asyncio
    async def test_create_user_hashes_password(self, user_repository: UserRepository):
        user = await UserFactory.create_user(user_repository)

        assert user.password != TEST_PASSWORD
        assert user.verify_password(TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_duplicate_username_rejected(self, user_repository: UserRepository):
        await UserFactory.create_user(user_repository)

        with pytest.raises(ValidationError) as exc_info:
            await UserFactory.create_user(user_repository)

        assert exc_info.value.detail == "Username already taken"
        assert exc_info.value.location == "username"

    @pytest.mark.asyncio
    async def test_username_taken_after_check_rejected(self, user_repository: UserRepository, monkeypatch):
        await UserFactory.create_user(user_repository)
        lookup = user_repository.get_by_username
        calls = []

        async def lookup_missing_first_time(username):
            # First lookup runs before the other registration commits
            calls.append(username)
            if len(calls) == 1:
                return None
            return await lookup(username)

        monkeypatch.setattr(user_repository, "get_by_username", lookup_missing_first_time)

        with pytest.raises(ValidationError) as exc_info:
            await UserFactory.create_user(user_repository)

        assert exc_info.value.detail == "Username already taken"
        assert exc_info.value.location == "username"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_get_by_username(self, user_repository: UserRepository):
        created = await UserFactory.create_user(user_repository, username="alice")

        assert (await user_repository.get_by_username("alice")).id == created.id
        assert await user_repository.get_by_username("nobody") is None

    @pytest.mark.asyncio
    async def test_authenticate(self, user_repository: UserRepository):
        await UserFactory.create_user(user_repository)

        assert await user_repository.authenticate("exampleUser", TEST_PASSWORD) is not None
        assert await user_repository.authenticate("exampleUser", "wrongPassword") is None
        assert await user_repository.authenticate("nobody", TEST_PASSWORD) is None
