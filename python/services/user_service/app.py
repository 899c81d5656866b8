"""User Service — FastAPI application for managing users with typed profile fields."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from common.models import (
    CreateUserRequest,
    ErrorResponse,
    HealthResponse,
    HelloResponse,
    ProfileField,
    UpdateUserRequest,
    User,
)
from common.profile_fields import (
    count_field_names,
    filter_fields_by_name,
    log_field_names,
    validate_field_names,
)
from user_service.config import EnvironmentVariables
from user_service.endpoint_filter import EndpointFilter
from user_service.exceptions import (
    ProfileFieldValidationError,
    UserNotFoundError,
    UserServiceError,
)
from user_service.store import InMemoryUserStore, UserStore, sample_users

environment_variables = EnvironmentVariables()

logging.basicConfig(
    level=environment_variables.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# disable logging calls to /health endpoint
logging.getLogger("uvicorn.access").addFilter(EndpointFilter(path="/health"))

# In-memory store
_store: UserStore = InMemoryUserStore(
    sample_users() if environment_variables.seed_sample_users else None
)


def get_user_store() -> UserStore:
    return _store


def _validate_profile_fields(fields: Optional[list[ProfileField]]) -> None:
    if fields is None:
        return
    log_field_names(fields)
    errors = validate_field_names(fields)
    if errors:
        logger.warning(f"Validation errors: {errors}")
        raise ProfileFieldValidationError(errors)


router = APIRouter(prefix="/api")


@router.get("/hello", response_model=HelloResponse)
def get_hello():
    return HelloResponse(message="Hello, World! Profile field discriminator demo is working!")


@router.get("/users", response_model=list[User])
def list_users(store: UserStore = Depends(get_user_store)):
    users = store.list_users()
    stats = count_field_names(users)
    if stats:
        logger.info(f"Profile field name stats: {stats}")
    return users


@router.post("/users", response_model=User, status_code=201)
def create_user(payload: CreateUserRequest, store: UserStore = Depends(get_user_store)):
    _validate_profile_fields(payload.profile_fields)
    return store.create_user(payload)


@router.get("/users/{user_id}", response_model=User)
def get_user(user_id: int, store: UserStore = Depends(get_user_store)):
    user = store.get_user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


@router.put("/users/{user_id}", response_model=User)
def update_user(
    user_id: int,
    payload: UpdateUserRequest,
    store: UserStore = Depends(get_user_store),
):
    if store.get_user(user_id) is None:
        raise UserNotFoundError(user_id)
    _validate_profile_fields(payload.profile_fields)
    user = store.update_user(user_id, payload)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


@router.delete("/users/{user_id}", status_code=204)
def delete_user(user_id: int, store: UserStore = Depends(get_user_store)):
    if not store.delete_user(user_id):
        raise UserNotFoundError(user_id)
    return Response(status_code=204)


@router.get("/users/{user_id}/profile-fields", response_model=list[ProfileField])
def list_profile_fields(
    user_id: int,
    name: Optional[str] = None,
    store: UserStore = Depends(get_user_store),
):
    user = store.get_user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    fields = user.profile_fields or []
    if name is None:
        return fields
    return filter_fields_by_name(fields, name)


app = FastAPI(title="User Service", version="0.3.0")


@app.middleware("http")
async def answer_options(request: Request, call_next):
    # OPTIONS requests that are not CORS preflights still get a bare 200
    if request.method == "OPTIONS":
        return Response(status_code=200)
    return await call_next(request)


# added after answer_options so CORS wraps it
app.add_middleware(
    CORSMiddleware,
    allow_origins=environment_variables.cors_allow_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(router)


@app.exception_handler(UserServiceError)
async def user_service_error_handler(request: Request, exc: UserServiceError):
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=exc.message, code=exc.code).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return PlainTextResponse("Invalid request body", status_code=400)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error while serving {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(message="Internal server error", code="INTERNAL_ERROR").model_dump(),
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok", service="user-service")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=environment_variables.host,
        port=environment_variables.port,
        log_level=environment_variables.log_level.lower(),
    )
