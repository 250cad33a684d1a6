from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import logging

from billing.database import get_db
from billing.services.user_service import (
    UserService,
    UserExistsError,
    UserNotFoundError,
    InvalidCredentialsError
)
from billing.schemas.common import MessageResponse
from billing.schemas.user import UserCreate, UserLogin, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.post(
    "/signup",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Create a user account. Username and email must both be unused."
)
def signup(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """
    Sign up a user.

    - **username**: Unique username (required)
    - **email**: Unique email address (required)
    - **password**: Password, stored hashed (required)
    - **phone**: Contact phone number (required)
    """
    service = UserService(db)

    try:
        service.signup(user_data)
    except UserExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except SQLAlchemyError:
        logger.exception("Error signing up")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Signup failed"
        )

    return {"message": "Signup successful"}


@router.post(
    "/login",
    response_model=MessageResponse,
    summary="Check user credentials",
    description="Verify a username and password. No session or token is issued."
)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db)
):
    """Log a user in."""
    service = UserService(db)

    try:
        service.login(credentials)
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e)
        )
    except SQLAlchemyError:
        logger.exception("Error logging in")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed"
        )

    return {"message": "Login successful"}


@router.get(
    "/users",
    response_model=List[UserResponse],
    summary="List all users",
    description="Get every registered user. Passwords are never included."
)
def list_users(db: Session = Depends(get_db)):
    service = UserService(db)

    try:
        return service.get_all()
    except SQLAlchemyError:
        logger.exception("Error fetching users")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user details"
        )
