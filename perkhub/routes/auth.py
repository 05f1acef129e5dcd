from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
import logging

from ..database import get_session
from ..models import User
from ..schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest, UserRead
from ..services.auth import (
    authenticate_user,
    create_access_token,
    get_current_user,
    register_user,
)

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_session)):
    user = register_user(db, payload)
    return AuthResponse(
        token=create_access_token(user.id),
        user=UserRead.model_validate(user),
    )

@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_session)):
    user = authenticate_user(db, payload.email, payload.password)
    if not user:
        logger.info("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    logger.info(f"User {user.id} logged in")
    return AuthResponse(
        token=create_access_token(user.id),
        user=UserRead.model_validate(user),
    )

@router.get("/me", response_model=MeResponse)
def read_me(current_user: User = Depends(get_current_user)):
    return MeResponse(user=UserRead.model_validate(current_user))
