"""Authentication endpoints."""
from gallery_admin.core.http import ApiClient, Credentials, ANONYMOUS
from gallery_admin.models.schemas import LoginRequest, LoginResponse, User


class AuthRepository:
    """Login and current-user lookups."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def login(self, email: str, password: str) -> LoginResponse:
        """
        Exchange email and password for a token.

        Raises:
            AuthenticationException: If the credentials are rejected
        """
        body = LoginRequest(email=email, password=password)
        data = await self.api.post("/auth/login", json=body.model_dump(), credentials=ANONYMOUS)
        return LoginResponse.model_validate(data)

    async def me(self, credentials: Credentials | None = None) -> User:
        """Get the user the credentials belong to."""
        data = await self.api.get("/auth/me", credentials=credentials)
        return User.model_validate(data)
