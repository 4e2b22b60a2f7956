"""
User authentication endpoints.
Provides register, login and current-user routes issuing bearer tokens.
"""
import logging
import secrets
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from app.rate_limit import limiter, RATE_LIMIT_LOGIN, RATE_LIMIT_SUBMIT
from app.store import find_user, load_db, save_db
from security.auth import (
    ROLES,
    create_access_token,
    hash_password,
    public_user,
    user_required,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

MIN_PASSWORD_LENGTH = 8


class RegisterRequest(BaseModel):
    email: str = ""
    password: str = ""
    name: Optional[str] = None
    role: str = "seeker"


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@router.post("/register", status_code=201)
@limiter.limit(RATE_LIMIT_SUBMIT)
async def register(request: Request, body: RegisterRequest):
    """
    Create an account and return a bearer token.
    Returns 400 on invalid input, 409 if the email is taken.
    """
    email = normalize_email(body.email)
    if not email or "@" not in email:
        raise HTTPException(status_code=400, detail="A valid email is required")
    if len(body.password or "") < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    role = (body.role or "seeker").strip().lower()
    if role not in ROLES:
        raise HTTPException(status_code=400, detail=f"Role must be one of: {', '.join(ROLES)}")

    db = load_db()
    if find_user(db, email=email):
        raise HTTPException(status_code=409, detail="Email already registered")

    user = {
        "id": secrets.token_hex(12),
        "email": email,
        "name": (body.name or "").strip() or email.split("@")[0],
        "role": role,
        "password_hash": hash_password(body.password),
        "created_at": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    }
    db["users"].append(user)
    save_db(db)

    logger.info(f"[auth] Registered {role} account {user['id']}")
    return {"token": create_access_token(user["id"]), "user": public_user(user)}


@router.post("/login")
@limiter.limit(RATE_LIMIT_LOGIN)
async def login(request: Request, body: LoginRequest):
    """
    Email/password login.
    Returns 401 on invalid credentials.
    """
    client_host = request.client.host if request.client else "unknown"
    email = normalize_email(body.email)

    user = find_user(load_db(), email=email) if email else None
    if not user or not verify_password(body.password or "", user.get("password_hash", "")):
        logger.warning(f"[auth] Invalid login attempt from {client_host}")
        raise HTTPException(
            status_code=401,
            detail="Invalid credentials"
        )

    logger.info(f"[auth] Login successful for {user['id']}")
    return {"token": create_access_token(user["id"]), "user": public_user(user)}


@router.get("/me")
async def me(user: dict = Depends(user_required)):
    """Return the signed-in user."""
    return public_user(user)
