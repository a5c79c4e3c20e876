# rentnest/db/models.py

import enum
from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Text,
    ForeignKey,
    Numeric,
    Boolean,
    JSON,
)
from sqlalchemy.orm import relationship

from rentnest.db.base import Base


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Statuses that reset leaves alone
FINISHED_STATUSES = (
    BookingStatus.COMPLETED.value,
    BookingStatus.CANCELLED.value,
    BookingStatus.REJECTED.value,
)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(32), nullable=True)

    # DB column name: password_hash
    # Python attribute: hashed_password
    hashed_password = Column("password_hash", String(255), nullable=False)

    # "owner" | "renter"
    role = Column(String(20), nullable=False, default="renter")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    properties = relationship(
        "Property",
        back_populates="owner",
        foreign_keys="Property.owner_id",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )

    bookings = relationship(
        "Booking",
        back_populates="user",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)

    owner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)
    location = Column(String(255), nullable=False, index=True)
    type = Column(String(50), nullable=False)

    bedrooms = Column(Integer, nullable=False, default=0)
    bathrooms = Column(Integer, nullable=False, default=0)
    size = Column(Integer, nullable=True)
    furnished = Column(Boolean, nullable=False, default=False)
    pet_friendly = Column(Boolean, nullable=False, default=False)
    availability_date = Column(Date, nullable=True)

    # list[str] as JSON in DB
    amenities = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)

    # Availability state, written only by rentnest.services.bookings
    is_available = Column(Boolean, nullable=False, default=True)
    booked_by_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    # Plain back-reference to bookings.id; may dangle, reset treats that as free
    active_booking_id = Column(Integer, nullable=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    # Relationships
    owner = relationship(
        "User",
        back_populates="properties",
        foreign_keys=[owner_id],
    )

    bookings = relationship(
        "Booking",
        back_populates="property",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    property_id = Column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    status = Column(
        String(20),
        nullable=False,
        default=BookingStatus.PENDING.value,
        index=True,
    )
    message = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    user = relationship("User", back_populates="bookings")
    property = relationship("Property", back_populates="bookings")
