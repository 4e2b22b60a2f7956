"""
Email/password authentication with signed bearer tokens.

Passwords are stored as salted PBKDF2-SHA256 hashes.
Tokens are itsdangerous timed signatures over the user id.
"""
import hashlib
import hmac
import secrets
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from itsdangerous import BadData, URLSafeTimedSerializer

from app.config import Settings
from app.store import find_user, load_db

TOKEN_SALT = "certjobs-access"
PBKDF2_ITERATIONS = 200_000
ROLES = ("seeker", "company")


def hash_password(password: str, salt: Optional[str] = None) -> str:
    """
    Hash a password.
    Format: pbkdf2_sha256$iterations$salt$hexdigest
    """
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), PBKDF2_ITERATIONS)
    return f"pbkdf2_sha256${PBKDF2_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    """Constant-time check of a password against a stored hash."""
    try:
        algorithm, iterations, salt, expected = stored.split("$")
        if algorithm != "pbkdf2_sha256":
            return False
        digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), int(iterations))
    except (ValueError, AttributeError):
        return False
    return hmac.compare_digest(digest.hex(), expected)


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(Settings.token_secret(), salt=TOKEN_SALT)


def create_access_token(user_id: str) -> str:
    return _serializer().dumps({"uid": user_id})


def verify_access_token(token: str, max_age: Optional[int] = None) -> Optional[str]:
    """
    Verify a bearer token.
    Returns the user id if valid, None otherwise.
    """
    if max_age is None:
        max_age = Settings.token_max_age()
    try:
        data = _serializer().loads(token, max_age=max_age)
    except BadData:
        return None
    if not isinstance(data, dict):
        return None
    return data.get("uid")


def get_bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """User record without the password hash."""
    return {key: value for key, value in user.items() if key != "password_hash"}


def get_current_user(request: Request) -> Optional[Dict[str, Any]]:
    """
    Get the user behind the request's bearer token.
    Returns None if not authenticated.
    """
    token = get_bearer_token(request)
    if not token:
        return None

    user_id = verify_access_token(token)
    if not user_id:
        return None

    return find_user(load_db(), user_id=user_id)


def user_required(request: Request) -> Dict[str, Any]:
    """
    FastAPI dependency that requires a signed-in user.
    Raises 401 HTTPException if not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def company_required(request: Request) -> Dict[str, Any]:
    """
    FastAPI dependency that requires a company account.
    Raises 401 if not authenticated, 403 for other roles.
    """
    user = user_required(request)
    if user.get("role") != "company":
        raise HTTPException(
            status_code=403,
            detail="Company account required"
        )
    return user
