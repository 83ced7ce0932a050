"""
School Models

Database model for registered schools and their coordinates.
"""

from sqlalchemy import Float, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.shared import BaseModel


class School(BaseModel):
    """
    A school with a street address and a geographic position.

    Schools are created through POST /addSchool and never updated or
    deleted by the API. The (name, address) pair is unique under
    case-insensitive comparison.
    """

    __tablename__ = "schools"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    address: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # Location (degrees)
    latitude: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )
    longitude: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<School(id={self.id}, name={self.name})>"


# Case-insensitive uniqueness of (name, address)
Index(
    "uq_schools_lower_name_lower_address",
    func.lower(School.name),
    func.lower(School.address),
    unique=True,
)
