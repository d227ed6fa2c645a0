"""
User directory API endpoints.

Listing and every mutation require a bearer token. Reading a single user
by id does not.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from user_directory.api.models.users import MessageResponse, ProblemDetails, UserPayload
from user_directory.lib.security import require_authentication
from user_directory.models.result import Outcome, ServiceResult
from user_directory.models.user import User
from user_directory.services.user_service import UserDirectoryService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

PROBLEM_DETAIL = "An unexpected error occurred."


def get_directory_service(request: Request) -> UserDirectoryService:
    return request.app.state.directory_service


def problem_response(detail: str = PROBLEM_DETAIL) -> JSONResponse:
    """500 problem body returned when a handler catches its own fault."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ProblemDetails(detail=detail).model_dump(),
        media_type="application/problem+json",
    )


def result_response(result: ServiceResult) -> Response:
    """Translate a ServiceResult into its HTTP response."""
    if result.outcome == Outcome.OK:
        return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(result.value))

    if result.outcome == Outcome.CREATED:
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content=jsonable_encoder(result.value),
            headers={"Location": f"/users/{result.value.id}"},
        )

    if result.outcome == Outcome.NO_CONTENT:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    if result.outcome == Outcome.NOT_FOUND:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": result.message})

    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": result.message})


@router.get(
    "",
    name="GetUsers",
    response_model=List[User],
    responses={401: {"model": MessageResponse}, 500: {"model": ProblemDetails}},
    dependencies=[Depends(require_authentication)],
)
async def get_users(
    page: Optional[int] = Query(None, description="1-based page number (default 1)"),
    page_size: Optional[int] = Query(None, alias="pageSize", description="Users per page (default 10)"),
    service: UserDirectoryService = Depends(get_directory_service),
):
    """Retrieve a page of users in insertion order."""
    try:
        return result_response(service.list_users(page, page_size))
    except Exception:
        logger.exception("An error occurred while retrieving users.")
        return problem_response()


@router.get(
    "/{user_id}",
    name="GetUserById",
    response_model=User,
    responses={404: {"model": MessageResponse}, 500: {"model": ProblemDetails}},
)
async def get_user_by_id(
    user_id: int,
    service: UserDirectoryService = Depends(get_directory_service),
):
    """Retrieve a specific user by id."""
    # TODO: confirm whether this lookup should require a token like its sibling routes
    try:
        return result_response(service.get_user(user_id))
    except Exception:
        logger.exception("An error occurred while retrieving the user.")
        return problem_response()


@router.post(
    "",
    name="AddUser",
    status_code=status.HTTP_201_CREATED,
    response_model=User,
    responses={400: {"model": MessageResponse}, 401: {"model": MessageResponse}},
    dependencies=[Depends(require_authentication)],
)
async def add_user(
    payload: UserPayload,
    service: UserDirectoryService = Depends(get_directory_service),
):
    """Add a new user. Faults here fall through to the pipeline backstop."""
    return result_response(service.create_user(payload.name, payload.email))


@router.put(
    "/{user_id}",
    name="UpdateUser",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"model": MessageResponse},
        401: {"model": MessageResponse},
        404: {"model": MessageResponse},
        500: {"model": ProblemDetails},
    },
    dependencies=[Depends(require_authentication)],
)
async def update_user(
    user_id: int,
    payload: UserPayload,
    service: UserDirectoryService = Depends(get_directory_service),
):
    """Update an existing user's name and email."""
    try:
        return result_response(service.update_user(user_id, payload.name, payload.email))
    except Exception:
        logger.exception("An error occurred while updating the user.")
        return problem_response()


@router.delete(
    "/{user_id}",
    name="DeleteUser",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={401: {"model": MessageResponse}, 404: {"model": MessageResponse}, 500: {"model": ProblemDetails}},
    dependencies=[Depends(require_authentication)],
)
async def delete_user(
    user_id: int,
    service: UserDirectoryService = Depends(get_directory_service),
):
    """Remove a user by id."""
    try:
        return result_response(service.delete_user(user_id))
    except Exception:
        logger.exception("An error occurred while deleting the user.")
        return problem_response()
