"""
Request body validation helpers.

Checks run in a fixed order and stop at the first violation: required
fields, then type, then whitespace, then minimum length, then maximum
length. Within each check fields are visited in declaration order.
"""

from typing import Any, Dict, Iterable, Mapping, Optional
from fastapi import Request
from json import JSONDecodeError

from dibs.utils.exceptions import BadRequestError, ValidationError


class SizeLimit:
    """Trimmed length bounds for a string field."""

    def __init__(self, min: Optional[int] = None, max: Optional[int] = None):
        self.min = min
        self.max = max


async def read_json_body(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object.

    Raises:
        ValidationError: If the body is not valid JSON or not an object
    """
    try:
        body = await request.json()
    except (JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("Request body must be valid JSON")
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def check_required_fields(body: Mapping[str, Any], fields: Iterable[str]) -> None:
    """422 naming the first required field absent from the body."""
    for field in fields:
        if field not in body:
            raise ValidationError("Missing field", location=field)


def check_string_fields(body: Mapping[str, Any], fields: Iterable[str], nullable: bool = False) -> None:
    """422 naming the first present field that is not a string (or null, when nullable)."""
    for field in fields:
        if field not in body or (nullable and body[field] is None):
            continue
        if not isinstance(body[field], str):
            raise ValidationError("Incorrect field type: expected string", location=field)


def check_trimmed_fields(body: Mapping[str, Any], fields: Iterable[str]) -> None:
    """422 naming the first present field with leading or trailing whitespace."""
    for field in fields:
        if field in body and body[field].strip() != body[field]:
            raise ValidationError("Cannot start or end with whitespace", location=field)


def check_sized_fields(body: Mapping[str, Any], sized_fields: Mapping[str, SizeLimit]) -> None:
    """
    Check trimmed lengths of the present sized fields.

    Every too-short field is reported before any too-long one.
    """
    for field, limit in sized_fields.items():
        if field in body and limit.min is not None and len(body[field].strip()) < limit.min:
            raise ValidationError(
                f"Must be at least {limit.min} characters long", location=field
            )
    for field, limit in sized_fields.items():
        if field in body and limit.max is not None and len(body[field].strip()) > limit.max:
            raise ValidationError(
                f"Must be at most {limit.max} characters long", location=field
            )


def validate_create_body(
    body: Mapping[str, Any],
    required_fields: Iterable[str],
    sized_fields: Mapping[str, SizeLimit],
    optional_string_fields: Iterable[str] = ()
) -> None:
    """
    Validate a create request: presence, string type of sized and optional
    string fields, then lengths.

    Raises:
        ValidationError: Naming the single offending field
    """
    check_required_fields(body, required_fields)
    check_string_fields(body, sized_fields)
    check_string_fields(body, optional_string_fields, nullable=True)
    check_sized_fields(body, sized_fields)


def validate_update_body(
    path_id: str,
    body: Mapping[str, Any],
    required_fields: Iterable[str],
    string_fields: Iterable[str] = (),
    optional_string_fields: Iterable[str] = ()
) -> None:
    """
    Validate an update request: every listed field present, ids matching,
    then string type of the given fields. Optional string fields may be null.

    Raises:
        BadRequestError: On the first missing field or an id mismatch
        ValidationError: On a present string field of another type
    """
    for field in required_fields:
        if field not in body:
            raise BadRequestError(f"Missing `{field}` in request body")

    if path_id != body["id"]:
        raise BadRequestError(
            f"Request path id ({path_id}) and request body id ({body['id']}) must match"
        )

    check_string_fields(body, string_fields)
    check_string_fields(body, optional_string_fields, nullable=True)
