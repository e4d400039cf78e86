"""
API routes for the mock login
"""
import logging
from fastapi import APIRouter, HTTPException, Request, Response

from ..config import settings
from ..database import get_storage
from ..exceptions import AuthenticationError
from ..models.user import LoginRequest, User
from ..services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=User)
async def login(request: LoginRequest, response: Response):
    """
    Sign in with a directory email
    """
    try:
        token, user = await auth_service.login(
            request.email,
            request.password,
            session_store=get_storage().session
        )
        response.set_cookie(settings.session_cookie, token, httponly=True, samesite="lax")
        return user

    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=e.message)
    except Exception as e:
        logger.error(f"Error during login: {e}")
        raise HTTPException(status_code=500, detail="Failed to login")


@router.post("/logout")
async def logout(request: Request, response: Response):
    """
    End the current session
    """
    try:
        await auth_service.logout(
            request.cookies.get(settings.session_cookie),
            session_store=get_storage().session
        )
        response.delete_cookie(settings.session_cookie)
        return {"message": "Logged out successfully"}

    except Exception as e:
        logger.error(f"Error during logout: {e}")
        raise HTTPException(status_code=500, detail="Failed to logout")
