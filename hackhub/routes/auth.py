"""
Authentication Routes
Registration, login and the current account
"""

import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Response, status

from hackhub.auth import Role, create_access_token, get_current_user, hash_password, verify_password
from hackhub.auth.dependencies import SESSION_COOKIE
from hackhub.config import settings
from hackhub.database import database
from hackhub.errors import ConflictError, NotFoundError
from hackhub.schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserResponse

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest):
    """
    Create a participant account

    Elevated roles (organizer, judge, mentor, admin) are assigned with
    scripts/create_user.py.
    """
    existing = await database.fetch_one(
        "SELECT id FROM users WHERE LOWER(email) = LOWER(:email)",
        {"email": request.email}
    )
    if existing:
        raise ConflictError("An account with this email already exists")

    user_id = str(uuid.uuid4())
    await database.execute(
        """
        INSERT INTO users (id, name, email, password_hash, role, created_at)
        VALUES (:id, :name, :email, :password_hash, :role, :created_at)
        """,
        {
            "id": user_id,
            "name": request.name,
            "email": request.email,
            "password_hash": hash_password(request.password),
            "role": Role.PARTICIPANT.value,
            "created_at": datetime.now(timezone.utc)
        }
    )

    user = await database.fetch_one(
        "SELECT id, name, email, role, created_at FROM users WHERE id = :id",
        {"id": user_id}
    )
    return dict(user._mapping)


@router.post("/login", response_model=LoginResponse)
async def login(credentials: LoginRequest, response: Response):
    """
    Login for every role

    Process:
    1. Look up the account by email
    2. Verify password
    3. Create JWT token and mirror it into the session cookie used by pages
    """
    user = await database.fetch_one(
        "SELECT id, email, password_hash, role FROM users WHERE LOWER(email) = LOWER(:email)",
        {"email": credentials.email}
    )

    if not user or not verify_password(credentials.password, user["password_hash"]):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    role = Role.parse(user["role"])
    access_token = create_access_token({
        "user_id": str(user["id"]),
        "email": user["email"],
        "role": role.value
    })

    response.set_cookie(
        SESSION_COOKIE,
        access_token,
        httponly=True,
        samesite="lax",
        max_age=settings.JWT_EXPIRATION_HOURS * 3600
    )

    return LoginResponse(
        status="success",
        message="Login successful",
        access_token=access_token,
        role=role.value,
        dashboard=role.dashboard_path
    )


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(SESSION_COOKIE)
    return {"status": "success", "message": "Logged out"}


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: dict = Depends(get_current_user)):
    """Get the logged-in account"""
    user = await database.fetch_one(
        "SELECT id, name, email, role, created_at FROM users WHERE id = :id",
        {"id": current_user["id"]}
    )
    if not user:
        raise NotFoundError("User")
    return dict(user._mapping)
