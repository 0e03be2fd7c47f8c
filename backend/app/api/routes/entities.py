"""Reference entity endpoints - one CRUD router per entity kind."""

import uuid

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from backend.app.api.deps import EntityStoreDep
from backend.app.models.common import EntityKind
from backend.app.models.entities import (
    Caterer,
    CatererCreate,
    Client,
    ClientCreate,
    Driver,
    DriverCreate,
    Hotel,
    HotelCreate,
    Location,
    LocationCreate,
    Staff,
    StaffCreate,
    ThirdParty,
    ThirdPartyCreate,
    Vehicle,
    VehicleCreate,
)

ENTITY_SCHEMAS: dict[EntityKind, tuple[type[BaseModel], type[BaseModel]]] = {
    EntityKind.client: (ClientCreate, Client),
    EntityKind.location: (LocationCreate, Location),
    EntityKind.hotel: (HotelCreate, Hotel),
    EntityKind.staff: (StaffCreate, Staff),
    EntityKind.driver: (DriverCreate, Driver),
    EntityKind.vehicle: (VehicleCreate, Vehicle),
    EntityKind.third_party: (ThirdPartyCreate, ThirdParty),
    EntityKind.caterer: (CatererCreate, Caterer),
}


def build_entity_router(
    kind: EntityKind, create_model: type[BaseModel], out_model: type[BaseModel]
) -> APIRouter:
    """Build list/create/get/replace/delete endpoints for one entity kind."""
    router = APIRouter(prefix=f"/entities/{kind.value}", tags=["entities"])

    @router.get("", response_model=list[out_model])  # type: ignore[valid-type]
    def list_entities(store: EntityStoreDep) -> list[BaseModel]:
        return [out_model.model_validate(row) for row in store.list_all(kind)]

    @router.post("", response_model=out_model, status_code=status.HTTP_201_CREATED)
    def create_entity(request: create_model, store: EntityStoreDep) -> BaseModel:  # type: ignore[valid-type]
        return out_model.model_validate(store.create(kind, request))

    @router.get("/{entity_id}", response_model=out_model)
    def get_entity(entity_id: uuid.UUID, store: EntityStoreDep) -> BaseModel:
        return out_model.model_validate(store.get(kind, entity_id))

    @router.put("/{entity_id}", response_model=out_model)
    def replace_entity(
        entity_id: uuid.UUID, request: create_model, store: EntityStoreDep  # type: ignore[valid-type]
    ) -> BaseModel:
        return out_model.model_validate(store.update(kind, entity_id, request))

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_entity(entity_id: uuid.UUID, store: EntityStoreDep) -> Response:
        store.delete(kind, entity_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


routers = [build_entity_router(kind, *schemas) for kind, schemas in ENTITY_SCHEMAS.items()]
