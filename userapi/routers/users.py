from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import APIRouter, Body, HTTPException, Query, Request

from userapi.core.utils import is_blank
from userapi.domain.users import parse_user_id
from userapi.repositories import StoreError
from userapi.schemas.users import UserRead, UserWrite
from userapi.services.user_service import InvalidInputError, UserNotFoundError, UserService

logger = logging.getLogger(__name__)


def _get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService not configured")
    return svc


@contextmanager
def _service_errors() -> Iterator[None]:
    """Translate service/store failures into HTTP errors."""
    try:
        yield
    except InvalidInputError as exc:
        raise HTTPException(400, str(exc)) from exc
    except UserNotFoundError as exc:
        raise HTTPException(404, "User not found.") from exc
    except StoreError as exc:
        logger.exception("User store failure")
        raise HTTPException(500, "Could not save changes.") from exc


def list_users(
    request: Request,
    page_number: int = Query(1, alias="pageNumber"),
    page_size: Optional[int] = Query(None, alias="pageSize"),
):
    svc = _get_user_service(request)
    with _service_errors():
        users = svc.list_users(page_number, page_size)
    return [UserRead.from_user(user) for user in users]


def init_users(request: Request):
    svc = _get_user_service(request)
    with _service_errors():
        return svc.init_demo_users()


def get_user(user_id: str, request: Request):
    svc = _get_user_service(request)
    with _service_errors():
        return UserRead.from_user(svc.get_user(user_id))


def create_user(request: Request, payload: Optional[UserWrite] = Body(None)):
    svc = _get_user_service(request)
    payload = payload or UserWrite()
    with _service_errors():
        user = svc.create_user(payload.first_name, payload.last_name, payload.email_address)
    return UserRead.from_user(user)


def update_user(user_id: str, request: Request, payload: Optional[UserWrite] = Body(None)):
    svc = _get_user_service(request)
    payload = payload or UserWrite()
    if not is_blank(payload.id) and parse_user_id(payload.id) != parse_user_id(user_id):
        raise HTTPException(400, "id in the body does not match the id in the URL.")
    with _service_errors():
        user = svc.update_user(user_id, payload.first_name, payload.last_name, payload.email_address)
    return UserRead.from_user(user)


def delete_user(user_id: str, request: Request):
    svc = _get_user_service(request)
    with _service_errors():
        return svc.delete_user(user_id)


# (method, path, endpoint, response model). "/init" must precede "/{user_id}".
ROUTES = (
    ("GET", "", list_users, list[UserRead]),
    ("GET", "/init", init_users, bool),
    ("GET", "/{user_id}", get_user, UserRead),
    ("POST", "", create_user, UserRead),
    ("PUT", "/{user_id}", update_user, UserRead),
    ("DELETE", "/{user_id}", delete_user, bool),
)

router = APIRouter(prefix="/user", tags=["user"])
for method, path, endpoint, response_model in ROUTES:
    router.add_api_route(
        path,
        endpoint,
        methods=[method],
        response_model=response_model,
        name=endpoint.__name__,
    )
