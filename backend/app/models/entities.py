"""Reference entity models - clients, locations, hotels, staff and providers."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backend.app.models.common import VehicleOwner


class StoredEntity(BaseModel):
    """Identity and timestamps common to every stored entity."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class LocationCreate(BaseModel):
    """Location fields."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    note: str | None = None


class Location(LocationCreate, StoredEntity):
    """Stored location."""


class ClientCreate(BaseModel):
    """Client fields."""

    name: str = Field(..., min_length=1)
    contact_number: str | None = None
    email: str | None = None
    date_of_birth: date | None = None
    nationality: str | None = None
    id_number: str | None = None
    note: str | None = None


class Client(ClientCreate, StoredEntity):
    """Stored client."""


class HotelCreate(BaseModel):
    """Hotel fields."""

    name: str = Field(..., min_length=1)
    location_id: uuid.UUID
    rating: float | None = Field(None, ge=0, le=5)
    price_range: str | None = None
    contact_number: str | None = None
    email: str | None = None
    address: str | None = None
    description: str | None = None


class Hotel(HotelCreate, StoredEntity):
    """Stored hotel."""


class StaffCreate(BaseModel):
    """Staff (guide) fields."""

    name: str = Field(..., min_length=1)
    contact_number: str | None = None
    email: str | None = None
    location_id: uuid.UUID | None = None
    languages: str | None = None
    note: str | None = None


class Staff(StaffCreate, StoredEntity):
    """Stored staff member."""


class DriverCreate(BaseModel):
    """Driver fields."""

    name: str = Field(..., min_length=1)
    contact_number: str | None = None
    email: str | None = None
    location_id: uuid.UUID | None = None
    note: str | None = None


class Driver(DriverCreate, StoredEntity):
    """Stored driver."""


class ThirdPartyCreate(BaseModel):
    """Third party provider fields."""

    name: str = Field(..., min_length=1)
    contact_number: str | None = None
    email: str | None = None
    note: str | None = None


class ThirdParty(ThirdPartyCreate, StoredEntity):
    """Stored third party."""


class CatererCreate(BaseModel):
    """Caterer fields."""

    name: str = Field(..., min_length=1)
    contact_number: str | None = None
    email: str | None = None
    location_id: uuid.UUID | None = None
    note: str | None = None


class Caterer(CatererCreate, StoredEntity):
    """Stored caterer."""


class VehicleCreate(BaseModel):
    """Vehicle fields."""

    type: str = Field(..., min_length=1)
    vehicle_owner: VehicleOwner
    location_id: uuid.UUID | None = None
    hotel_id: uuid.UUID | None = None
    third_party_id: uuid.UUID | None = None
    note: str | None = None

    @model_validator(mode="after")
    def validate_owner_reference(self) -> "VehicleCreate":
        """Ensure the owner reference matches the ownership kind."""
        if self.vehicle_owner == VehicleOwner.third_party and self.third_party_id is None:
            raise ValueError("third_party_id is required for third-party vehicles")
        if self.vehicle_owner == VehicleOwner.hotel and self.hotel_id is None:
            raise ValueError("hotel_id is required for hotel vehicles")
        # Only the matching owner reference is kept
        if self.vehicle_owner != VehicleOwner.third_party:
            self.third_party_id = None
        if self.vehicle_owner != VehicleOwner.hotel:
            self.hotel_id = None
        return self


class Vehicle(VehicleCreate, StoredEntity):
    """Stored vehicle."""
