from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from zenith.web.cookies import clear_session_cookie
from zenith.web.routes import DASHBOARD_PATH, LOGIN_PATH

router = APIRouter(tags=["session"])


@router.get("/", summary="Entry point", operation_id="root", include_in_schema=False)
async def root() -> RedirectResponse:
    return RedirectResponse(url=DASHBOARD_PATH)


@router.post(
    "/logout",
    summary="End session",
    description="Clear the session cookie and go back to the login page.",
    operation_id="logout",
    status_code=303,
    response_class=RedirectResponse,
)
async def logout() -> RedirectResponse:
    response = RedirectResponse(url=LOGIN_PATH, status_code=303)
    clear_session_cookie(response)
    return response
