"""CRUD routers generated from collection definitions."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Request

from homedash.core.modules.record.models import CollectionDefinition, Record
from homedash.core.modules.registry import COLLECTIONS
from homedash.web.deps import AppDep, CurrentUserDep
from homedash.web.envelope import Envelope, ok
from homedash.web.openapi import ErrorResponse

JsonObject = Annotated[dict[str, Any], Body(default_factory=dict, description="Record fields (camelCase keys)")]


def create_collection_router[R: Record](definition: CollectionDefinition[R]) -> APIRouter:
    """Build list/create/update/delete endpoints for one collection.

    All handlers run behind the session guard and operate on the current user's
    records only.
    """
    router = APIRouter(tags=[definition.name])
    base_path = definition.base_path
    label = definition.model.__name__.lower()
    not_authenticated = {"model": ErrorResponse, "description": "Not authenticated"}
    not_found = {"model": ErrorResponse, "description": f"No such {label} for the current user"}

    @router.get(
        base_path,
        summary=f"List {definition.name}",
        description=f"Get all {definition.name} of the current user.",
        operation_id=f"list_{definition.name}",
        response_model=Envelope[list[definition.model]],  # type: ignore[name-defined]
        responses={401: not_authenticated},
    )
    async def list_records(request: Request, app: AppDep, current_user: CurrentUserDep) -> Envelope[list[R]]:
        return ok(await app.list_records(current_user, definition, request.query_params))

    @router.post(
        base_path,
        summary=f"Create {label}",
        description=f"Validate the body and store a new {label} with a generated id and timestamps.",
        operation_id=f"create_{label}",
        status_code=201,
        response_model=Envelope[definition.model],  # type: ignore[name-defined]
        responses={400: {"model": ErrorResponse, "description": "Validation failed"}, 401: not_authenticated},
    )
    async def create_record(payload: JsonObject, app: AppDep, current_user: CurrentUserDep) -> Envelope[R]:
        return ok(await app.create_record(current_user, definition, payload))

    @router.put(
        f"{base_path}/{{record_id}}",
        summary=f"Update {label}",
        description=f"Partially update a {label}. Only the provided fields change; updatedAt is refreshed.",
        operation_id=f"update_{label}",
        response_model=Envelope[definition.model],  # type: ignore[name-defined]
        responses={
            400: {"model": ErrorResponse, "description": "Validation failed or no fields to update"},
            401: not_authenticated,
            404: not_found,
        },
    )
    async def update_record(record_id: str, payload: JsonObject, app: AppDep, current_user: CurrentUserDep) -> Envelope[R]:
        return ok(await app.update_record(current_user, definition, record_id, payload))

    @router.delete(
        f"{base_path}/{{record_id}}",
        summary=f"Delete {label}",
        description=f"Remove a {label} and return it.",
        operation_id=f"delete_{label}",
        response_model=Envelope[definition.model],  # type: ignore[name-defined]
        responses={401: not_authenticated, 404: not_found},
    )
    async def delete_record(record_id: str, app: AppDep, current_user: CurrentUserDep) -> Envelope[R]:
        return ok(await app.delete_record(current_user, definition, record_id))

    return router


collection_routers = [create_collection_router(definition) for definition in COLLECTIONS]
