"""Participant assignment - who is on a route and on which segments.

An empty segment set means the participant is on no segment. On update,
segment_ids=None leaves the set alone and [] clears it.
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.db.engine import atomic
from backend.app.db.entity_store import SqlEntityStore
from backend.app.db.models import Route, RouteParticipant, RouteSegment, SegmentParticipant
from backend.app.db.repositories import EntityStore
from backend.app.errors import ConflictError, NotFoundError, ValidationError
from backend.app.itinerary.derive import participant_display_name
from backend.app.models.common import EntityKind, ParticipantRole
from backend.app.models.participant import ParticipantCreate, ParticipantOut, ParticipantUpdate
from backend.app.utils.logging import StructuredOperationLogger

logger = logging.getLogger(__name__)


def display_name(participant: RouteParticipant) -> str:
    """Participant name from the linked client or staff row."""
    return participant_display_name(
        participant.role,
        participant.client.name if participant.client else None,
        participant.guide.name if participant.guide else None,
    )


def check_role_reference(
    role: ParticipantRole, client_id: uuid.UUID | None, guide_id: uuid.UUID | None
) -> None:
    """Clients reference a client row; every other role references staff.

    Raises:
        ValidationError: If the references do not match the role
    """
    if role == ParticipantRole.client:
        if client_id is None or guide_id is not None:
            raise ValidationError("A client participant needs client_id and no guide_id")
    elif guide_id is None or client_id is not None:
        raise ValidationError(f"A {role.value} participant needs guide_id and no client_id")


class ParticipantAssignment:
    """Adds participants to routes and assigns them to segments."""

    def __init__(self, session: Session, entities: EntityStore | None = None) -> None:
        self._session = session
        self._entities = entities or SqlEntityStore(session)
        self._ops = StructuredOperationLogger("participants")

    def add_participant(self, route_id: uuid.UUID, payload: ParticipantCreate) -> ParticipantOut:
        """Add a participant to a route.

        Raises:
            NotFoundError: If the route or referenced client/staff is missing
            ValidationError: On role/reference mismatch or foreign segment ids
        """
        with atomic(self._session):
            self._require_route(route_id)
            check_role_reference(payload.role, payload.client_id, payload.guide_id)
            self._check_person(payload.role, payload.client_id, payload.guide_id)
            segment_ids = self._check_segments(route_id, payload.segment_ids)

            participant = RouteParticipant(
                route_id=route_id,
                role=payload.role.value,
                client_id=payload.client_id,
                guide_id=payload.guide_id,
                is_optional=payload.is_optional,
                notes=payload.notes,
            )
            participant.segment_links = [SegmentParticipant(segment_id=sid) for sid in segment_ids]
            self._session.add(participant)
            self._session.flush()

        self._ops.log_operation(
            "add_participant", route_id=route_id, participant_id=participant.id, role=participant.role
        )
        return self.to_out(participant)

    def update_participant(
        self, participant_id: uuid.UUID, payload: ParticipantUpdate
    ) -> ParticipantOut:
        """Apply a partial update. segment_ids=None keeps the current set."""
        data = payload.model_dump(exclude_unset=True)
        with atomic(self._session):
            participant = self._require_participant(participant_id)

            role = ParticipantRole(data.get("role") or participant.role)
            client_id = data["client_id"] if "client_id" in data else participant.client_id
            guide_id = data["guide_id"] if "guide_id" in data else participant.guide_id
            # Switching between client and staff roles drops the stale reference
            if "role" in data and role == ParticipantRole.client and "guide_id" not in data:
                guide_id = None
            if "role" in data and role != ParticipantRole.client and "client_id" not in data:
                client_id = None
            check_role_reference(role, client_id, guide_id)
            self._check_person(role, client_id, guide_id)

            participant.role = role.value
            participant.client_id = client_id
            participant.guide_id = guide_id
            if data.get("is_optional") is not None:
                participant.is_optional = data["is_optional"]
            if "notes" in data:
                participant.notes = data["notes"]
            if data.get("segment_ids") is not None:
                self._replace_segments(participant, data["segment_ids"])
            self._session.flush()
            # Relationship attributes follow the ids on next access
            self._session.expire(participant, ["client", "guide"])

        self._ops.log_operation(
            "update_participant", route_id=participant.route_id, participant_id=participant_id
        )
        return self.to_out(participant)

    def remove_participant(self, participant_id: uuid.UUID) -> None:
        """Remove a participant with its room, segment and transfer links."""
        with atomic(self._session):
            participant = self._require_participant(participant_id)
            route_id = participant.route_id
            self._session.delete(participant)
        # Rooms, segments and transfers loaded earlier still hold the removed links
        self._session.expire_all()

        self._ops.log_operation(
            "remove_participant", route_id=route_id, participant_id=participant_id
        )

    def get_participant(self, participant_id: uuid.UUID) -> ParticipantOut:
        """Get one participant."""
        return self.to_out(self._require_participant(participant_id))

    def list_participants(self, route_id: uuid.UUID) -> list[ParticipantOut]:
        """List a route's participants in the order they were added."""
        self._require_route(route_id)
        participants = self._session.scalars(
            select(RouteParticipant)
            .where(RouteParticipant.route_id == route_id)
            .order_by(RouteParticipant.created_at)
        )
        return [self.to_out(p) for p in participants.all()]

    def update_segment_assignment(
        self, participant_id: uuid.UUID, segment_ids: list[uuid.UUID]
    ) -> ParticipantOut:
        """Replace the participant's segment set. [] means no segment."""
        with atomic(self._session):
            participant = self._require_participant(participant_id)
            self._replace_segments(participant, segment_ids)
            self._session.flush()

        self._ops.log_operation(
            "update_segment_assignment",
            route_id=participant.route_id,
            participant_id=participant_id,
            segments=len(segment_ids),
        )
        return self.to_out(participant)

    def add_to_segment(self, segment_id: uuid.UUID, participant_id: uuid.UUID) -> ParticipantOut:
        """Link one participant to one segment.

        Raises:
            NotFoundError: If the segment or participant does not exist
            ValidationError: If they belong to different routes
            ConflictError: If the link already exists
        """
        with atomic(self._session):
            participant = self._require_participant(participant_id)
            self._check_segments(participant.route_id, [segment_id])
            if any(link.segment_id == segment_id for link in participant.segment_links):
                raise ConflictError("Participant is already on this segment")
            participant.segment_links.append(SegmentParticipant(segment_id=segment_id))
            self._session.flush()

        self._ops.log_operation(
            "add_to_segment", route_id=participant.route_id, participant_id=participant_id
        )
        return self.to_out(participant)

    def remove_from_segment(self, segment_id: uuid.UUID, participant_id: uuid.UUID) -> None:
        """Unlink one participant from one segment."""
        with atomic(self._session):
            participant = self._require_participant(participant_id)
            link = next(
                (link for link in participant.segment_links if link.segment_id == segment_id), None
            )
            if link is None:
                raise NotFoundError("Participant is not on this segment")
            participant.segment_links.remove(link)

        self._ops.log_operation(
            "remove_from_segment", route_id=participant.route_id, participant_id=participant_id
        )

    def list_segment_participants(self, segment_id: uuid.UUID) -> list[ParticipantOut]:
        """List participants linked to a segment."""
        if self._session.get(RouteSegment, segment_id) is None:
            raise NotFoundError("Segment not found")
        participants = self._session.scalars(
            select(RouteParticipant)
            .join(SegmentParticipant)
            .where(SegmentParticipant.segment_id == segment_id)
            .order_by(RouteParticipant.created_at)
        )
        return [self.to_out(p) for p in participants.all()]

    def participant_display_name(self, participant: RouteParticipant) -> str:
        """Display name with Client / Staff Member fallbacks."""
        return display_name(participant)

    def to_out(self, participant: RouteParticipant) -> ParticipantOut:
        """Render a participant; only segments still on the route are reported."""
        live = set(
            self._session.scalars(
                select(RouteSegment.id).where(RouteSegment.route_id == participant.route_id)
            )
        )
        return ParticipantOut(
            id=participant.id,
            route_id=participant.route_id,
            role=ParticipantRole(participant.role),
            client_id=participant.client_id,
            guide_id=participant.guide_id,
            name=display_name(participant),
            is_optional=participant.is_optional,
            notes=participant.notes,
            segment_ids=[
                link.segment_id for link in participant.segment_links if link.segment_id in live
            ],
            created_at=participant.created_at,
            updated_at=participant.updated_at,
        )

    def _replace_segments(self, participant: RouteParticipant, segment_ids: list[uuid.UUID]) -> None:
        wanted = self._check_segments(participant.route_id, segment_ids)
        current = {link.segment_id: link for link in participant.segment_links}
        participant.segment_links = [
            current.get(sid) or SegmentParticipant(segment_id=sid) for sid in wanted
        ]

    def _check_segments(
        self, route_id: uuid.UUID, segment_ids: list[uuid.UUID]
    ) -> list[uuid.UUID]:
        """Deduplicate and require every id to be a segment of the route."""
        wanted = list(dict.fromkeys(segment_ids))
        if not wanted:
            return []
        found = set(
            self._session.scalars(
                select(RouteSegment.id).where(
                    RouteSegment.route_id == route_id, RouteSegment.id.in_(wanted)
                )
            )
        )
        if len(found) != len(wanted):
            raise ValidationError("Segment does not belong to this route")
        return wanted

    def _check_person(
        self, role: ParticipantRole, client_id: uuid.UUID | None, guide_id: uuid.UUID | None
    ) -> None:
        if role == ParticipantRole.client:
            if self._entities.get_by_id(EntityKind.client, client_id) is None:  # type: ignore[arg-type]
                raise NotFoundError("Client not found")
        elif self._entities.get_by_id(EntityKind.staff, guide_id) is None:  # type: ignore[arg-type]
            raise NotFoundError("Staff not found")

    def _require_route(self, route_id: uuid.UUID) -> Route:
        route = self._session.get(Route, route_id)
        if route is None:
            raise NotFoundError("Route not found")
        return route

    def _require_participant(self, participant_id: uuid.UUID) -> RouteParticipant:
        participant = self._session.get(RouteParticipant, participant_id)
        if participant is None:
            raise NotFoundError("Participant not found")
        return participant
