"""
Property model for bookable resources.
Handles address data with state code validation and public serialization.
"""

from sqlalchemy import String, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, validates
from dibs.database import Base
from dibs.utils.exceptions import ValidationError
from typing import Optional, Dict, Any


# Two-letter US state, district and territory codes
STATE_CODES = frozenset([
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
    "DC", "AS", "GU", "MP", "PR", "VI",
])


class Property(Base):
    """
    A bookable property. Owner is a free-form string with no link to User.
    """

    __tablename__ = "properties"

    api_fields = {
        "name": "name",
        "street": "street",
        "city": "city",
        "state": "state",
        "zipcode": "zipcode",
        "type": "type",
        "owner": "owner",
        "thumbUrl": "thumb_url",
    }

    name: Mapped[str] = mapped_column(Text, nullable=False)

    # Address
    street: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str] = mapped_column(Text, nullable=False)
    state: Mapped[str] = mapped_column(String(2), nullable=False)
    zipcode: Mapped[int] = mapped_column(Integer, nullable=False)

    type: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Property category, e.g. house or cabin"
    )

    owner: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    thumb_url: Mapped[str] = mapped_column(Text, nullable=False)

    @validates("state")
    def validate_state(self, key: str, value: Any) -> str:
        if value not in STATE_CODES:
            raise ValidationError("Must be a valid state code", location="state")
        return value

    @validates("zipcode")
    def validate_zipcode(self, key: str, value: Any) -> int:
        if isinstance(value, bool):
            raise ValidationError("Must be a number", location="zipcode")
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        if not isinstance(value, int):
            raise ValidationError("Must be a number", location="zipcode")
        return value

    def serialize(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zipcode": self.zipcode,
            "type": self.type,
            "owner": self.owner,
            "thumbUrl": self.thumb_url,
        }
