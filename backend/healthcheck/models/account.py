from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)


class LoginRequest(BaseModel):
    email: str
    password: str


class GoogleLoginRequest(BaseModel):
    credential: str  # Google ID token from the Sign-In button


class UserProfile(BaseModel):
    id: str
    email: str
    name: str = ""


class AuthResponse(BaseModel):
    token: str | None  # None until the user confirms their email
    user: UserProfile
    message: str | None = None


class AuthSession(BaseModel):
    """The caller behind a request, resolved from its bearer token."""

    model_config = ConfigDict(frozen=True)

    user: UserProfile
    access_token: str
