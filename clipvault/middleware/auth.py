from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
import httpx
from functools import lru_cache
from typing import Optional

from clipvault.config import Settings

security = HTTPBearer(auto_error=False)

PRODUCTION_ENVS = {"production", "prod"}


@lru_cache()
def get_jwks(auth0_domain: str):
    """Fetch Auth0 JWKS (JSON Web Key Set) for token verification."""
    if not auth0_domain:
        return None
    jwks_url = f"https://{auth0_domain}/.well-known/jwks.json"
    response = httpx.get(jwks_url)
    return response.json()


def get_signing_key(token: str, auth0_domain: str):
    """Get the signing key from JWKS that matches the token's kid."""
    jwks = get_jwks(auth0_domain)
    if not jwks:
        return None

    unverified_header = jwt.get_unverified_header(token)
    return find_signing_key(jwks, unverified_header.get("kid"))


def find_signing_key(jwks: dict, kid: Optional[str]):
    """RSA key in ``jwks`` whose kid matches. Entries without a kid never match."""
    if not kid:
        return None
    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return {
                "kty": key.get("kty"),
                "kid": kid,
                "use": key.get("use", "sig"),
                "n": key.get("n"),
                "e": key.get("e"),
            }
    return None


class User:
    def __init__(self, user_id: str, email: Optional[str] = None):
        self.user_id = user_id
        self.email = email


def is_production(settings: Settings) -> bool:
    return settings.env.strip().lower() in PRODUCTION_ENVS


class CallerIdentity:
    """How unauthenticated callers are treated. Fixed when the app is created."""

    def __init__(self, allow_dev_identity: bool = False, dev_user_id: Optional[str] = None):
        self.allow_dev_identity = allow_dev_identity
        self.dev_user_id = dev_user_id

    @classmethod
    def from_settings(cls, settings: Settings) -> "CallerIdentity":
        if settings.allow_dev_identity and is_production(settings):
            raise RuntimeError("allow_dev_identity must not be enabled in production")
        return cls(settings.allow_dev_identity, settings.dev_user_id)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[User]:
    """
    Get current authenticated user from JWT token.
    Returns None if not authenticated.
    """
    if not credentials:
        return None

    settings = get_app_settings(request)
    if not settings.auth0_domain:
        return None

    token = credentials.credentials

    try:
        signing_key = get_signing_key(token, settings.auth0_domain)
        if not signing_key:
            return None

        payload = jwt.decode(
            token,
            signing_key,
            algorithms=settings.auth0_algorithms,
            audience=settings.auth0_audience,
            issuer=f"https://{settings.auth0_domain}/",
        )

        user_id = payload.get("sub")
        email = payload.get("email")

        if not user_id:
            return None

        return User(user_id=user_id, email=email)

    except JWTError:
        return None


async def get_caller_id(
    request: Request,
    user: Optional[User] = Depends(get_current_user),
) -> str:
    """Owner id for the request.

    Falls back to the development identity only when the app was created
    with ``allow_dev_identity``; otherwise anonymous callers get a 401.
    """
    if user:
        return user.user_id

    identity: CallerIdentity = request.app.state.identity
    if identity.allow_dev_identity and identity.dev_user_id:
        return identity.dev_user_id

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={"WWW-Authenticate": "Bearer"},
    )
