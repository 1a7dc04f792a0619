"""HTTP route definitions for signup and login."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field

from ..domain.account import AuthenticatedUser
from ..domain.contracts import LoginInput, SignupInput
from ..domain.service import AuthService

router = APIRouter(prefix="/api")


class SignupRequest(BaseModel):
    """Payload accepted when registering an account.

    Fields are optional at the schema level so that missing values reach the
    service and are reported with the uniform 400 body.
    """

    model_config = ConfigDict(populate_by_name=True)

    full_name: str | None = Field(default=None, alias="fullName")
    email: str | None = None
    password: str | None = None
    username: str | None = None


class SignupResponse(BaseModel):
    """Acknowledgement returned after a successful signup."""

    success: bool = True
    message: str


class LoginRequest(BaseModel):
    """Credentials posted to the login endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    email_or_username: str | None = Field(default=None, alias="emailOrUsername")
    password: str | None = None


class UserProfile(BaseModel):
    """Public profile fields returned after login."""

    id: int
    name: str
    email: str

    @classmethod
    def from_domain(cls, user: AuthenticatedUser) -> "UserProfile":
        """Build a response model from the authenticated user."""
        return cls(id=user.id, name=user.full_name, email=user.email)


class LoginResponse(BaseModel):
    """Login result wrapping the public user profile."""

    success: bool = True
    message: str
    user: UserProfile


def get_service(request: Request) -> AuthService:
    """Resolve the `AuthService` stored on the FastAPI application state."""
    service: AuthService = request.app.state.auth_service
    return service


@router.post("/signup", response_model=SignupResponse)
def signup(
    payload: SignupRequest,
    service: AuthService = Depends(get_service),
) -> SignupResponse:
    """Register an account; the response never echoes submitted credentials."""
    service.signup(
        SignupInput(
            full_name=payload.full_name,
            email=payload.email,
            password=payload.password,
            username=payload.username,
        )
    )
    return SignupResponse(message="Signup successful")


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_service),
) -> LoginResponse:
    """Verify credentials and return the user's id, name and email."""
    user = service.login(
        LoginInput(identifier=payload.email_or_username, password=payload.password)
    )
    return LoginResponse(message="Login successful", user=UserProfile.from_domain(user))
