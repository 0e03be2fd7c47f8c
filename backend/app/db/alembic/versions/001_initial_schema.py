"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates:
- reference entities: locations, clients, hotels, staff, drivers,
  third_parties, vehicles, caterers
- accounts (one primary per scope via partial unique index)
- routes and everything hanging off them: segments, stops, logistics,
  accommodations, rooms, room occupants, participants, segment links,
  transfers, transfer vehicles, transfer participants, transactions
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _id() -> sa.Column:
    return sa.Column("id", sa.Uuid(), primary_key=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _money(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.Numeric(12, 2), server_default="0", nullable=nullable)


def _location_ref(name: str, nullable: bool = True, ondelete: str | None = "SET NULL") -> sa.Column:
    return sa.Column(name, sa.Uuid(), sa.ForeignKey("locations.id", ondelete=ondelete), nullable=nullable)


def upgrade() -> None:
    """Create all tables."""
    # Reference entities
    op.create_table(
        "locations",
        _id(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "clients",
        _id(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("contact_number", sa.Text(), nullable=True),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("nationality", sa.Text(), nullable=True),
        sa.Column("id_number", sa.Text(), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "hotels",
        _id(),
        sa.Column("name", sa.Text(), nullable=False),
        _location_ref("location_id", nullable=False, ondelete=None),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("price_range", sa.Text(), nullable=True),
        sa.Column("contact_number", sa.Text(), nullable=True),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "staff",
        _id(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("contact_number", sa.Text(), nullable=True),
        sa.Column("email", sa.Text(), nullable=True),
        _location_ref("location_id"),
        sa.Column("languages", sa.Text(), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "drivers",
        _id(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("contact_number", sa.Text(), nullable=True),
        sa.Column("email", sa.Text(), nullable=True),
        _location_ref("location_id"),
        sa.Column("note", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "third_parties",
        _id(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("contact_number", sa.Text(), nullable=True),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "vehicles",
        _id(),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("vehicle_owner", sa.Text(), nullable=False),
        _location_ref("location_id"),
        sa.Column("hotel_id", sa.Uuid(), sa.ForeignKey("hotels.id", ondelete="SET NULL"), nullable=True),
        sa.Column(
            "third_party_id",
            sa.Uuid(),
            sa.ForeignKey("third_parties.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("note", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "caterers",
        _id(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("contact_number", sa.Text(), nullable=True),
        sa.Column("email", sa.Text(), nullable=True),
        _location_ref("location_id"),
        sa.Column("note", sa.Text(), nullable=True),
        *_timestamps(),
    )

    # Accounts
    op.create_table(
        "accounts",
        _id(),
        sa.Column("entity_type", sa.Text(), nullable=False),
        sa.Column("entity_id", sa.Uuid(), nullable=True),
        sa.Column("scope_key", sa.Text(), nullable=False),
        sa.Column("account_type", sa.Text(), nullable=False),
        sa.Column("account_holder_name", sa.Text(), nullable=False),
        sa.Column("bank_name", sa.Text(), nullable=True),
        sa.Column("account_number", sa.Text(), nullable=True),
        sa.Column("iban", sa.Text(), nullable=True),
        sa.Column("swift_bic", sa.Text(), nullable=True),
        sa.Column("routing_number", sa.Text(), nullable=True),
        sa.Column("currency", sa.Text(), nullable=True),
        sa.Column("service_name", sa.Text(), nullable=True),
        sa.Column("is_primary", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_accounts_scope", "accounts", ["entity_type", "entity_id"])
    op.create_index(
        "uq_accounts_primary_scope",
        "accounts",
        ["scope_key"],
        unique=True,
        postgresql_where=sa.text("is_primary"),
        sqlite_where=sa.text("is_primary = 1"),
    )

    # Routes
    op.create_table(
        "routes",
        _id(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("status", sa.Text(), server_default="draft", nullable=False),
        sa.Column("currency", sa.Text(), nullable=False),
        _money("estimated_cost"),
        _money("actual_cost"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("duration", sa.Integer(), server_default="0", nullable=False),
        sa.Column("total_distance", sa.Float(), server_default="0", nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_routes_status_start", "routes", ["status", "start_date"])

    op.create_table(
        "route_segments",
        _id(),
        sa.Column("route_id", sa.Uuid(), sa.ForeignKey("routes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("day_number", sa.Integer(), nullable=False),
        sa.Column("segment_order", sa.Integer(), nullable=False),
        _location_ref("from_location_id"),
        _location_ref("to_location_id"),
        _location_ref("overnight_location_id"),
        sa.Column("distance", sa.Float(), server_default="0", nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_segments_route_order", "route_segments", ["route_id", "segment_order"])

    op.create_table(
        "route_segment_stops",
        _id(),
        sa.Column(
            "segment_id", sa.Uuid(), sa.ForeignKey("route_segments.id", ondelete="CASCADE"), nullable=False
        ),
        _location_ref("location_id", nullable=False, ondelete=None),
        sa.Column("stop_order", sa.Integer(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "route_logistics",
        _id(),
        sa.Column("route_id", sa.Uuid(), sa.ForeignKey("routes.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "segment_id", sa.Uuid(), sa.ForeignKey("route_segments.id", ondelete="CASCADE"), nullable=True
        ),
        sa.Column("logistics_type", sa.Text(), nullable=False),
        sa.Column("entity_type", sa.Text(), nullable=True),
        sa.Column("entity_id", sa.Uuid(), nullable=True),
        sa.Column("item_name", sa.Text(), nullable=True),
        sa.Column("quantity", sa.Integer(), server_default="1", nullable=False),
        _money("cost"),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("driver_pilot_name", sa.Text(), nullable=True),
        sa.Column("vehicle_type", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_logistics_route_segment", "route_logistics", ["route_id", "segment_id"])

    op.create_table(
        "route_segment_accommodations",
        _id(),
        sa.Column(
            "segment_id", sa.Uuid(), sa.ForeignKey("route_segments.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("hotel_id", sa.Uuid(), sa.ForeignKey("hotels.id"), nullable=False),
        sa.Column("group_type", sa.Text(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "route_segment_accommodation_rooms",
        _id(),
        sa.Column(
            "accommodation_id",
            sa.Uuid(),
            sa.ForeignKey("route_segment_accommodations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("room_type", sa.Text(), nullable=False),
        sa.Column("room_label", sa.Text(), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=True),
        _money("cost_per_night"),
        sa.Column("is_couple", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "route_participants",
        _id(),
        sa.Column("route_id", sa.Uuid(), sa.ForeignKey("routes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role", sa.Text(), nullable=False),
        sa.Column("client_id", sa.Uuid(), sa.ForeignKey("clients.id"), nullable=True),
        sa.Column("guide_id", sa.Uuid(), sa.ForeignKey("staff.id"), nullable=True),
        sa.Column("is_optional", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "route_segment_accommodation_room_participants",
        sa.Column(
            "room_id",
            sa.Uuid(),
            sa.ForeignKey("route_segment_accommodation_rooms.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "participant_id",
            sa.Uuid(),
            sa.ForeignKey("route_participants.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "route_segment_participants",
        sa.Column(
            "segment_id", sa.Uuid(), sa.ForeignKey("route_segments.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column(
            "participant_id",
            sa.Uuid(),
            sa.ForeignKey("route_participants.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "route_transfers",
        _id(),
        sa.Column("route_id", sa.Uuid(), sa.ForeignKey("routes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("transfer_date", sa.Date(), nullable=False),
        _location_ref("from_location_id", nullable=False, ondelete=None),
        _location_ref("to_location_id", nullable=False, ondelete=None),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_transfers_route_date", "route_transfers", ["route_id", "transfer_date"])

    op.create_table(
        "route_transfer_vehicles",
        _id(),
        sa.Column(
            "transfer_id", sa.Uuid(), sa.ForeignKey("route_transfers.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("vehicle_id", sa.Uuid(), sa.ForeignKey("vehicles.id"), nullable=False),
        sa.Column("driver_pilot_name", sa.Text(), nullable=True),
        sa.Column("quantity", sa.Integer(), server_default="1", nullable=False),
        _money("cost"),
        sa.Column("is_own_vehicle", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "route_transfer_participants",
        _id(),
        sa.Column(
            "transfer_id", sa.Uuid(), sa.ForeignKey("route_transfers.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column(
            "participant_id",
            sa.Uuid(),
            sa.ForeignKey("route_participants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("transfer_id", "participant_id", name="uq_transfer_participant"),
    )

    op.create_table(
        "route_transactions",
        _id(),
        sa.Column("route_id", sa.Uuid(), sa.ForeignKey("routes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("transaction_date", sa.Date(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("currency", sa.Text(), nullable=False),
        sa.Column("payment_method", sa.Text(), nullable=True),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "from_account_id", sa.Uuid(), sa.ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True
        ),
        sa.Column(
            "to_account_id", sa.Uuid(), sa.ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True
        ),
        *_timestamps(),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("route_transactions")
    op.drop_table("route_transfer_participants")
    op.drop_table("route_transfer_vehicles")
    op.drop_index("idx_transfers_route_date", table_name="route_transfers")
    op.drop_table("route_transfers")
    op.drop_table("route_segment_participants")
    op.drop_table("route_segment_accommodation_room_participants")
    op.drop_table("route_participants")
    op.drop_table("route_segment_accommodation_rooms")
    op.drop_table("route_segment_accommodations")
    op.drop_index("idx_logistics_route_segment", table_name="route_logistics")
    op.drop_table("route_logistics")
    op.drop_table("route_segment_stops")
    op.drop_index("idx_segments_route_order", table_name="route_segments")
    op.drop_table("route_segments")
    op.drop_index("idx_routes_status_start", table_name="routes")
    op.drop_table("routes")
    op.drop_index("uq_accounts_primary_scope", table_name="accounts")
    op.drop_index("idx_accounts_scope", table_name="accounts")
    op.drop_table("accounts")
    op.drop_table("caterers")
    op.drop_table("vehicles")
    op.drop_table("third_parties")
    op.drop_table("drivers")
    op.drop_table("staff")
    op.drop_table("hotels")
    op.drop_table("clients")
    op.drop_table("locations")
