from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from zenith.web.cookies import set_session_cookie
from zenith.web.deps import AppDep
from zenith.web.openapi import ErrorResponse
from zenith.web.routes import DASHBOARD_PATH

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    """Authentication request."""

    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Account password")


class RegisterRequest(BaseModel):
    """Registration request."""

    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Password, at least 6 characters")
    display_name: str = Field(..., description="Name shown in the app")


class AuthResponse(BaseModel):
    success: bool = Field(..., description="Whether the user is now logged in")
    redirect: str = Field(DASHBOARD_PATH, description="Where the client should navigate next")


class AuthForm(BaseModel):
    """Descriptor of an auth form for the front end to render."""

    form: str = Field(..., description="Form name")
    action: str = Field(..., description="Path to POST the form to")
    fields: list[str] = Field(..., description="Field names, in display order")


@router.get("/login", summary="Login form", operation_id="getLoginForm")
async def login_form() -> AuthForm:
    return AuthForm(form="login", action="/auth/login", fields=["email", "password"])


@router.get("/register", summary="Registration form", operation_id="getRegisterForm")
async def register_form() -> AuthForm:
    return AuthForm(form="register", action="/auth/register", fields=["display_name", "email", "password"])


@router.post(
    "/login",
    summary="Authenticate user",
    description="Authenticate with email and password; the session is stored in the `session` cookie.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(login_data: LoginRequest, app: AppDep, response: Response) -> AuthResponse:
    token, session = await app.login(login_data.email, login_data.password)
    set_session_cookie(response, token, session.expires_at, app.config.cookie_secure)
    return AuthResponse(success=True)


@router.post(
    "/register",
    summary="Create account",
    description="Create an account and log it in.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "Account created and logged in"},
        400: {"model": ErrorResponse, "description": "Missing fields, short password or email in use"},
    },
)
async def register(register_data: RegisterRequest, app: AppDep, response: Response) -> AuthResponse:
    token, session = await app.register(register_data.email, register_data.password, register_data.display_name)
    set_session_cookie(response, token, session.expires_at, app.config.cookie_secure)
    return AuthResponse(success=True)
