from fastapi import APIRouter, Response
from pydantic import BaseModel, Field, HttpUrl

from zenith.core.modules.user.models import UserProfile, UserProfilePatch
from zenith.web.cookies import set_session_cookie
from zenith.web.deps import AppDep, SessionDep
from zenith.web.openapi import ErrorResponse

router = APIRouter(prefix="/dashboard/profile", tags=["profile"])


class UpdatePhotoRequest(BaseModel):
    photo_url: HttpUrl = Field(..., description="Public URL of the new profile picture")


@router.get(
    "",
    summary="Get current user profile",
    operation_id="getCurrentUserProfile",
    responses={404: {"model": ErrorResponse, "description": "Profile not found"}},
)
async def get_profile(app: AppDep, session: SessionDep) -> UserProfile:
    return await app.get_profile(session)


@router.patch(
    "",
    summary="Update profile",
    description="Partial update; the session cookie is re-issued with the new claims.",
    operation_id="updateUserProfile",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid value"},
        500: {"model": ErrorResponse, "description": "Could not update profile"},
    },
)
async def update_profile(patch: UserProfilePatch, app: AppDep, session: SessionDep, response: Response) -> UserProfile:
    profile, token = await app.update_profile(session, patch)
    set_session_cookie(response, token, session.expires_at, app.config.cookie_secure)
    return profile


@router.put(
    "/photo",
    summary="Set profile picture",
    operation_id="updateProfilePhoto",
    responses={500: {"model": ErrorResponse, "description": "Could not update profile"}},
)
async def update_photo(request: UpdatePhotoRequest, app: AppDep, session: SessionDep, response: Response) -> UserProfile:
    profile, token = await app.update_photo(session, str(request.photo_url))
    set_session_cookie(response, token, session.expires_at, app.config.cookie_secure)
    return profile
