"""SQLAlchemy ORM models for reference entities, routes and accounts."""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
    UniqueConstraint,
    Uuid,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    """created_at / updated_at columns shared by every table."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )


def _money() -> Numeric:
    return Numeric(12, 2, asdecimal=False)


# ---------------------------------------------------------------------------
# Reference entities
# ---------------------------------------------------------------------------


class Location(TimestampMixin, Base):
    """Named place used as segment endpoint, stop, or transfer endpoint."""

    __tablename__ = "locations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)


class Client(TimestampMixin, Base):
    """Paying customer."""

    __tablename__ = "clients"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    contact_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    nationality: Mapped[str | None] = mapped_column(Text, nullable=True)
    id_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)


class Hotel(TimestampMixin, Base):
    """Hotel or pousada."""

    __tablename__ = "hotels"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    location_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("locations.id"), nullable=False
    )
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    price_range: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class Staff(TimestampMixin, Base):
    """Guide or other staff member."""

    __tablename__ = "staff"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    contact_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("locations.id", ondelete="SET NULL"), nullable=True
    )
    languages: Mapped[str | None] = mapped_column(Text, nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)


class Driver(TimestampMixin, Base):
    """Driver or boat pilot."""

    __tablename__ = "drivers"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    contact_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("locations.id", ondelete="SET NULL"), nullable=True
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)


class ThirdParty(TimestampMixin, Base):
    """External provider (vehicle owner, caterer, activity vendor)."""

    __tablename__ = "third_parties"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    contact_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)


class Vehicle(TimestampMixin, Base):
    """Vehicle owned by the company, a hotel, or a third party."""

    __tablename__ = "vehicles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    type: Mapped[str] = mapped_column(Text, nullable=False)
    vehicle_owner: Mapped[str] = mapped_column(Text, nullable=False)
    location_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("locations.id", ondelete="SET NULL"), nullable=True
    )
    hotel_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("hotels.id", ondelete="SET NULL"), nullable=True
    )
    third_party_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("third_parties.id", ondelete="SET NULL"), nullable=True
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    hotel: Mapped["Hotel | None"] = relationship("Hotel")
    third_party: Mapped["ThirdParty | None"] = relationship("ThirdParty")


class Caterer(TimestampMixin, Base):
    """Meal provider."""

    __tablename__ = "caterers"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    contact_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("locations.id", ondelete="SET NULL"), nullable=True
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


class Account(TimestampMixin, Base):
    """Financial account attached to an entity (or to the company)."""

    __tablename__ = "accounts"
    __table_args__ = (
        Index("idx_accounts_scope", "entity_type", "entity_id"),
        # One primary per scope; a lost demotion race surfaces as IntegrityError
        Index(
            "uq_accounts_primary_scope",
            "scope_key",
            unique=True,
            postgresql_where=text("is_primary"),
            sqlite_where=text("is_primary = 1"),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    entity_type: Mapped[str] = mapped_column(Text, nullable=False)
    entity_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    scope_key: Mapped[str] = mapped_column(Text, nullable=False)
    account_type: Mapped[str] = mapped_column(Text, nullable=False)
    account_holder_name: Mapped[str] = mapped_column(Text, nullable=False)
    bank_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    account_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    iban: Mapped[str | None] = mapped_column(Text, nullable=True)
    swift_bic: Mapped[str | None] = mapped_column(Text, nullable=True)
    routing_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    currency: Mapped[str | None] = mapped_column(Text, nullable=True)
    service_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


class Route(TimestampMixin, Base):
    """Multi-day trip."""

    __tablename__ = "routes"
    __table_args__ = (Index("idx_routes_status_start", "status", "start_date"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(Text, nullable=False, default="draft")
    currency: Mapped[str] = mapped_column(Text, nullable=False)
    estimated_cost: Mapped[float] = mapped_column(_money(), nullable=False, default=0)
    actual_cost: Mapped[float] = mapped_column(_money(), nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Derived from segments, persisted for list filtering
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_distance: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    segments: Mapped[list["RouteSegment"]] = relationship(
        "RouteSegment", back_populates="route", cascade="all, delete-orphan"
    )
    logistics: Mapped[list["RouteLogistics"]] = relationship(
        "RouteLogistics", back_populates="route", cascade="all, delete-orphan"
    )
    participants: Mapped[list["RouteParticipant"]] = relationship(
        "RouteParticipant", back_populates="route", cascade="all, delete-orphan"
    )
    transfers: Mapped[list["RouteTransfer"]] = relationship(
        "RouteTransfer", back_populates="route", cascade="all, delete-orphan"
    )
    transactions: Mapped[list["RouteTransaction"]] = relationship(
        "RouteTransaction", back_populates="route", cascade="all, delete-orphan"
    )


class RouteSegment(TimestampMixin, Base):
    """One day-leg of a route."""

    __tablename__ = "route_segments"
    __table_args__ = (Index("idx_segments_route_order", "route_id", "segment_order"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    route_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("routes.id", ondelete="CASCADE"), nullable=False
    )
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    segment_order: Mapped[int] = mapped_column(Integer, nullable=False)
    from_location_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("locations.id", ondelete="SET NULL"), nullable=True
    )
    to_location_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("locations.id", ondelete="SET NULL"), nullable=True
    )
    overnight_location_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("locations.id", ondelete="SET NULL"), nullable=True
    )
    distance: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    route: Mapped["Route"] = relationship("Route", back_populates="segments")
    stops: Mapped[list["RouteSegmentStop"]] = relationship(
        "RouteSegmentStop",
        back_populates="segment",
        cascade="all, delete-orphan",
        order_by="RouteSegmentStop.stop_order",
    )
    accommodations: Mapped[list["RouteSegmentAccommodation"]] = relationship(
        "RouteSegmentAccommodation", back_populates="segment", cascade="all, delete-orphan"
    )
    participant_links: Mapped[list["SegmentParticipant"]] = relationship(
        "SegmentParticipant", back_populates="segment", cascade="all, delete-orphan"
    )
    logistics: Mapped[list["RouteLogistics"]] = relationship(
        "RouteLogistics", back_populates="segment", cascade="all"
    )


class RouteSegmentStop(TimestampMixin, Base):
    """Intermediate stop within a segment."""

    __tablename__ = "route_segment_stops"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    segment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("route_segments.id", ondelete="CASCADE"), nullable=False
    )
    location_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("locations.id"), nullable=False
    )
    stop_order: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    segment: Mapped["RouteSegment"] = relationship("RouteSegment", back_populates="stops")


class RouteLogistics(TimestampMixin, Base):
    """Cost-bearing item attached to a segment (or to the route itself)."""

    __tablename__ = "route_logistics"
    __table_args__ = (Index("idx_logistics_route_segment", "route_id", "segment_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    route_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("routes.id", ondelete="CASCADE"), nullable=False
    )
    segment_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("route_segments.id", ondelete="CASCADE"), nullable=True
    )
    logistics_type: Mapped[str] = mapped_column(Text, nullable=False)
    # Polymorphic reference, resolved through the entity store
    entity_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    entity_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    item_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    cost: Mapped[float] = mapped_column(_money(), nullable=False, default=0)
    service_date: Mapped[date | None] = mapped_column("date", Date, nullable=True)
    driver_pilot_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    vehicle_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    route: Mapped["Route"] = relationship("Route", back_populates="logistics")
    segment: Mapped["RouteSegment | None"] = relationship(
        "RouteSegment", back_populates="logistics"
    )


class RouteSegmentAccommodation(TimestampMixin, Base):
    """Hotel booking for one segment."""

    __tablename__ = "route_segment_accommodations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    segment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("route_segments.id", ondelete="CASCADE"), nullable=False
    )
    hotel_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("hotels.id"), nullable=False)
    group_type: Mapped[str] = mapped_column(Text, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    segment: Mapped["RouteSegment"] = relationship(
        "RouteSegment", back_populates="accommodations"
    )
    rooms: Mapped[list["AccommodationRoom"]] = relationship(
        "AccommodationRoom", back_populates="accommodation", cascade="all, delete-orphan"
    )


class AccommodationRoom(TimestampMixin, Base):
    """Room within an accommodation booking."""

    __tablename__ = "route_segment_accommodation_rooms"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    accommodation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("route_segment_accommodations.id", ondelete="CASCADE"), nullable=False
    )
    room_type: Mapped[str] = mapped_column(Text, nullable=False)
    room_label: Mapped[str | None] = mapped_column(Text, nullable=True)
    capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cost_per_night: Mapped[float] = mapped_column(_money(), nullable=False, default=0)
    is_couple: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    accommodation: Mapped["RouteSegmentAccommodation"] = relationship(
        "RouteSegmentAccommodation", back_populates="rooms"
    )
    occupants: Mapped[list["RoomOccupant"]] = relationship(
        "RoomOccupant", back_populates="room", cascade="all, delete-orphan"
    )


class RoomOccupant(Base):
    """Participant placed in a room."""

    __tablename__ = "route_segment_accommodation_room_participants"

    room_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("route_segment_accommodation_rooms.id", ondelete="CASCADE"),
        primary_key=True,
    )
    participant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("route_participants.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    room: Mapped["AccommodationRoom"] = relationship("AccommodationRoom", back_populates="occupants")
    participant: Mapped["RouteParticipant"] = relationship(
        "RouteParticipant", back_populates="room_occupancies"
    )


class RouteParticipant(TimestampMixin, Base):
    """Client or staff member on a route."""

    __tablename__ = "route_participants"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    route_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("routes.id", ondelete="CASCADE"), nullable=False
    )
    role: Mapped[str] = mapped_column(Text, nullable=False)
    client_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("clients.id"), nullable=True
    )
    guide_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("staff.id"), nullable=True
    )
    is_optional: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    route: Mapped["Route"] = relationship("Route", back_populates="participants")
    client: Mapped["Client | None"] = relationship("Client")
    guide: Mapped["Staff | None"] = relationship("Staff")
    segment_links: Mapped[list["SegmentParticipant"]] = relationship(
        "SegmentParticipant", back_populates="participant", cascade="all, delete-orphan"
    )
    room_occupancies: Mapped[list["RoomOccupant"]] = relationship(
        "RoomOccupant", back_populates="participant", cascade="all, delete-orphan"
    )
    transfer_links: Mapped[list["TransferParticipant"]] = relationship(
        "TransferParticipant", back_populates="participant", cascade="all, delete-orphan"
    )


class SegmentParticipant(Base):
    """Participant active on a segment."""

    __tablename__ = "route_segment_participants"

    segment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("route_segments.id", ondelete="CASCADE"), primary_key=True
    )
    participant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("route_participants.id", ondelete="CASCADE"), primary_key=True
    )

    segment: Mapped["RouteSegment"] = relationship(
        "RouteSegment", back_populates="participant_links"
    )
    participant: Mapped["RouteParticipant"] = relationship(
        "RouteParticipant", back_populates="segment_links"
    )


class RouteTransfer(TimestampMixin, Base):
    """Point-to-point movement not tied to a segment."""

    __tablename__ = "route_transfers"
    __table_args__ = (Index("idx_transfers_route_date", "route_id", "transfer_date"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    route_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("routes.id", ondelete="CASCADE"), nullable=False
    )
    transfer_date: Mapped[date] = mapped_column(Date, nullable=False)
    from_location_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("locations.id"), nullable=False
    )
    to_location_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("locations.id"), nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    route: Mapped["Route"] = relationship("Route", back_populates="transfers")
    vehicles: Mapped[list["RouteTransferVehicle"]] = relationship(
        "RouteTransferVehicle", back_populates="transfer", cascade="all, delete-orphan"
    )
    participant_links: Mapped[list["TransferParticipant"]] = relationship(
        "TransferParticipant", back_populates="transfer", cascade="all, delete-orphan"
    )


class RouteTransferVehicle(TimestampMixin, Base):
    """Vehicle line item on a transfer."""

    __tablename__ = "route_transfer_vehicles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    transfer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("route_transfers.id", ondelete="CASCADE"), nullable=False
    )
    vehicle_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("vehicles.id"), nullable=False
    )
    driver_pilot_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    cost: Mapped[float] = mapped_column(_money(), nullable=False, default=0)
    is_own_vehicle: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    transfer: Mapped["RouteTransfer"] = relationship("RouteTransfer", back_populates="vehicles")


class TransferParticipant(Base):
    """Participant riding on a transfer."""

    __tablename__ = "route_transfer_participants"
    __table_args__ = (
        UniqueConstraint("transfer_id", "participant_id", name="uq_transfer_participant"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    transfer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("route_transfers.id", ondelete="CASCADE"), nullable=False
    )
    participant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("route_participants.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    transfer: Mapped["RouteTransfer"] = relationship(
        "RouteTransfer", back_populates="participant_links"
    )
    participant: Mapped["RouteParticipant"] = relationship(
        "RouteParticipant", back_populates="transfer_links"
    )


class RouteTransaction(TimestampMixin, Base):
    """Recorded payment snapshot for a route."""

    __tablename__ = "route_transactions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    route_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("routes.id", ondelete="CASCADE"), nullable=False
    )
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[float] = mapped_column(_money(), nullable=False)
    currency: Mapped[str] = mapped_column(Text, nullable=False)
    payment_method: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    from_account_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True
    )
    to_account_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True
    )

    route: Mapped["Route"] = relationship("Route", back_populates="transactions")
