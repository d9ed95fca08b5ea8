"""
Property and reservation endpoints.

Both resources share one contract, registered from the route table at the
bottom of this module:

* ``GET /<resource>``: every record, serialized, in store order
* ``POST /<resource>``: validate, store, 201 with the serialized record
* ``PUT /<resource>/{id}``: all update fields present and ids equal, then
  set the given fields; 204 even if the id does not exist
* ``DELETE /<resource>/{id}``: 204 whether or not anything was removed

Every route requires a bearer token. Anything else under this router is a
plain-text 404.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel
from typing import Any, Callable, Dict, List, Optional, Type
import logging

from dibs.database import Base
from dibs.models.property import Property
from dibs.models.reservation import Reservation
from dibs.repositories.base import BaseRepository
from dibs.schemas.property import PropertyResponse
from dibs.schemas.reservation import ReservationResponse
from dibs.services.auth import AuthenticatedUser
from dibs.utils.dependencies import (
    jwt_auth,
    get_property_repository,
    get_reservation_repository
)
from dibs.utils.exceptions import APIException, InternalServerError
from dibs.utils.validators import (
    SizeLimit,
    read_json_body,
    validate_create_body,
    validate_update_body
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dibs", tags=["Dibs"])


class Resource:
    """Route table entry: one resource's path, model and field rules."""

    def __init__(
        self,
        path: str,
        model: Type[Base],
        get_repository: Callable,
        response_schema: Type[BaseModel],
        required_fields: List[str],
        sized_fields: Dict[str, SizeLimit],
        optional_string_fields: Optional[List[str]] = None
    ):
        self.path = path
        self.model = model
        self.get_repository = get_repository
        self.response_schema = response_schema
        self.required_fields = required_fields
        self.sized_fields = sized_fields
        self.optional_string_fields = optional_string_fields or []

    @property
    def update_fields(self) -> List[str]:
        return self.required_fields + ["id"]

    @property
    def name(self) -> str:
        return self.model.__name__


def add_resource_routes(router: APIRouter, resource: Resource) -> None:
    """Register list, create, update and delete routes for a resource."""

    @router.get(
        resource.path,
        status_code=status.HTTP_200_OK,
        response_model=List[resource.response_schema],
        summary=f"List {resource.path.strip('/')}",
        name=f"list_{resource.name.lower()}"
    )
    async def list_records(
        current_user: AuthenticatedUser = Depends(jwt_auth),
        repository: BaseRepository = Depends(resource.get_repository)
    ) -> List[Dict[str, Any]]:
        try:
            records = await repository.get_all()
        except Exception as e:
            logger.error(f"Failed to list {resource.name} records: {e}")
            raise InternalServerError()
        return [record.serialize() for record in records]

    @router.post(
        resource.path,
        status_code=status.HTTP_201_CREATED,
        response_model=resource.response_schema,
        summary=f"Create {resource.name.lower()}",
        name=f"create_{resource.name.lower()}"
    )
    async def create_record(
        request: Request,
        current_user: AuthenticatedUser = Depends(jwt_auth),
        repository: BaseRepository = Depends(resource.get_repository)
    ) -> Dict[str, Any]:
        body = await read_json_body(request)
        validate_create_body(
            body,
            resource.required_fields,
            resource.sized_fields,
            resource.optional_string_fields
        )

        try:
            record = await repository.create(resource.model.attributes_from_api(body))
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to create {resource.name}: {e}")
            raise InternalServerError()

        logger.info(f"{resource.name} {record.id} created by {current_user.username}")
        return record.serialize()

    @router.put(
        resource.path + "/{record_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary=f"Update {resource.name.lower()}",
        name=f"update_{resource.name.lower()}"
    )
    async def update_record(
        record_id: str,
        request: Request,
        current_user: AuthenticatedUser = Depends(jwt_auth),
        repository: BaseRepository = Depends(resource.get_repository)
    ) -> Response:
        body = await read_json_body(request)
        validate_update_body(
            record_id,
            body,
            resource.update_fields,
            string_fields=list(resource.sized_fields),
            optional_string_fields=resource.optional_string_fields
        )

        try:
            record = await repository.update(record_id, resource.model.attributes_from_api(body))
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to update {resource.name} {record_id}: {e}")
            raise InternalServerError()

        if record is None:
            logger.info(f"Update of missing {resource.name} {record_id} ignored")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete(
        resource.path + "/{record_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary=f"Delete {resource.name.lower()}",
        name=f"delete_{resource.name.lower()}"
    )
    async def delete_record(
        record_id: str,
        current_user: AuthenticatedUser = Depends(jwt_auth),
        repository: BaseRepository = Depends(resource.get_repository)
    ) -> Response:
        try:
            await repository.delete(record_id)
        except Exception as e:
            logger.error(f"Failed to delete {resource.name} {record_id}: {e}")
            raise InternalServerError()
        return Response(status_code=status.HTTP_204_NO_CONTENT)


PROPERTIES = Resource(
    path="/properties",
    model=Property,
    get_repository=get_property_repository,
    response_schema=PropertyResponse,
    required_fields=["name", "street", "city", "state", "zipcode", "type", "thumbUrl"],
    sized_fields={
        "name": SizeLimit(min=1),
        "street": SizeLimit(min=1),
        "city": SizeLimit(min=1),
        "state": SizeLimit(min=2, max=2),
        "type": SizeLimit(min=1),
        "thumbUrl": SizeLimit(min=1),
    },
    optional_string_fields=["owner"]
)

RESERVATIONS = Resource(
    path="/reservations",
    model=Reservation,
    get_repository=get_reservation_repository,
    response_schema=ReservationResponse,
    required_fields=["username", "propertyName", "start", "end"],
    sized_fields={
        "username": SizeLimit(min=1),
        "propertyName": SizeLimit(min=1),
        "start": SizeLimit(min=1),
        "end": SizeLimit(min=1),
    }
)

for _resource in (PROPERTIES, RESERVATIONS):
    add_resource_routes(router, _resource)


# Must stay last: catches every unmatched path and method under /dibs
@router.api_route(
    "/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False
)
async def not_found(path: str) -> PlainTextResponse:
    return PlainTextResponse("URL Not Found", status_code=status.HTTP_404_NOT_FOUND)
