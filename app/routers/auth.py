import logging

from fastapi import APIRouter, Depends, HTTPException

from app import dependencies as deps
from app.schemas.auth import LoginRequest, LoginResponse
from app.services.auth_service import (
    AuthService,
    InvalidCredentialsError,
    TooManyAttemptsError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    service: AuthService = Depends(deps.get_auth_service),
):
    if not credentials.username or not credentials.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

    try:
        return service.login(credentials.username, credentials.password)
    except TooManyAttemptsError:
        raise HTTPException(
            status_code=429, detail="Too many login attempts. Please try again later."
        )
    except InvalidCredentialsError:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    except Exception as e:
        logger.error(f"Login error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
