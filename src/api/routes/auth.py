"""Authentication routes.

This module handles HTTP endpoints for user authentication and registration,
and provides the ``get_current_user`` dependency used by every other router.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

import pytz
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ADMIN_TOKEN,
    JWT_ALGORITHM,
    JWT_SECRET_KEY,
    ROLE_ADMIN,
)
from core.dependencies import UserManagerDep
from core.exceptions import UnauthorizedError, ValidationError
from schemas.user import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    SeedAdminRequest,
    SignupRequest,
    User,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])

# HTTP Bearer token security; missing headers are reported as 401 below
security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token.

    Args:
        data: Data to encode in the token.
        expires_delta: Optional expiration time delta.

    Returns:
        Encoded JWT token string.
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(pytz.utc) + expires_delta
    else:
        expire = datetime.now(pytz.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def create_user_token(user: User) -> str:
    """Issue a token carrying the user's id, role and name metadata."""
    return create_access_token(
        data={
            "sub": user.id,
            "email": user.email,
            "role": user.role,
            "firstName": user.first_name,
            "lastName": user.last_name,
        }
    )


def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """Verify JWT token from Authorization header.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent.

    Returns:
        Decoded token payload.

    Raises:
        HTTPException: If the token is missing, invalid or expired.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    try:
        payload = jwt.decode(credentials.credentials, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        )
    if payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        )
    return payload


def get_current_user(
    token_payload: dict = Depends(verify_token),
    user_manager: UserManagerDep = None,
) -> User:
    """Get current authenticated user.

    The role used for authorization is the one stored on the user record.

    Args:
        token_payload: Decoded JWT token payload.
        user_manager: Injected UserManager instance.

    Returns:
        Current User object.

    Raises:
        HTTPException: If user is not found.
    """
    user = user_manager.get_user_by_id(token_payload["sub"])
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


@router.post("/signup", response_model=UserResponse, summary="Student signup")
def signup(
    req: SignupRequest,
    user_manager: UserManagerDep = None,
) -> UserResponse:
    """Register a new student account.

    Args:
        req: Signup request with email, student ID, names and password.
        user_manager: Injected UserManager instance.

    Returns:
        UserResponse with the created user.
    """
    user = user_manager.signup_student(
        email=req.email,
        student_id=req.student_id,
        first_name=req.first_name,
        last_name=req.last_name,
        password=req.password,
    )
    return UserResponse(user=user)


@router.post("/login", response_model=LoginResponse, summary="Login")
def login(
    req: LoginRequest,
    user_manager: UserManagerDep = None,
) -> LoginResponse:
    """Login with email and password.

    Args:
        req: Login request with email and password.
        user_manager: Injected UserManager instance.

    Returns:
        LoginResponse with user information and JWT token.

    Raises:
        HTTPException: If the credentials are wrong.
    """
    user = user_manager.authenticate(req.email, req.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return LoginResponse(access_token=create_user_token(user), user=user)


@router.post("/logout", summary="Logout")
def logout() -> dict:
    """Acknowledge a logout.

    Tokens are stateless, so the client simply discards its copy.
    """
    return {"success": True, "message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse, summary="Current user")
def get_current_user_info(
    current_user: User = Depends(get_current_user),
) -> CurrentUserResponse:
    """Get current authenticated user information."""
    return CurrentUserResponse(user=current_user)


@router.post("/seed-admin", response_model=UserResponse, summary="Create an admin account")
def seed_admin(
    req: SeedAdminRequest,
    user_manager: UserManagerDep = None,
) -> UserResponse:
    """Create an admin account, gated by the configured ADMIN_TOKEN.

    Raises:
        ValidationError: If admin seeding is not configured or fields are missing.
        UnauthorizedError: If the admin token does not match.
    """
    if not ADMIN_TOKEN:
        logger.error("ADMIN_TOKEN is not set in environment variables")
        raise ValidationError("Admin seeding is not configured")
    if req.admin_token != ADMIN_TOKEN:
        logger.warning("Rejected admin seeding with a wrong admin token")
        raise UnauthorizedError("Invalid admin token")
    if not req.email or not req.password:
        raise ValidationError("Email and password are required")

    user = user_manager.create_user(
        email=req.email,
        password=req.password,
        first_name=req.first_name or "Admin",
        last_name=req.last_name or "User",
        role=ROLE_ADMIN,
    )
    return UserResponse(user=user)
