"""
Reservation model: a user's claim on a property for a time window.
"""

from sqlalchemy import DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column, validates
from dibs.database import Base
from dibs.utils.exceptions import ValidationError
from datetime import datetime, timezone
from typing import Dict, Any


def parse_instant(value: Any, field: str) -> datetime:
    """
    Parse an ISO-8601 string (or datetime) into an aware UTC datetime.
    Naive values are taken to be UTC.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError("Must be an ISO-8601 date", location=field)
    if not isinstance(value, datetime):
        raise ValidationError("Must be an ISO-8601 date", location=field)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_instant(value: datetime) -> str:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Reservation(Base):
    """
    Reservation of a property, referenced by name rather than id.

    Neither ``start < end`` nor overlap with other reservations of the same
    property is checked.
    """

    __tablename__ = "reservations"

    api_fields = {
        "username": "username",
        "propertyName": "property_name",
        "start": "start",
        "end": "end",
    }

    username: Mapped[str] = mapped_column(Text, nullable=False, index=True)

    property_name: Mapped[str] = mapped_column(Text, nullable=False, index=True)

    start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    @validates("start", "end")
    def validate_instant(self, key: str, value: Any) -> datetime:
        return parse_instant(value, key)

    def serialize(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "propertyName": self.property_name,
            "start": format_instant(self.start),
            "end": format_instant(self.end),
        }
