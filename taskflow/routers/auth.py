from fastapi import APIRouter, Depends

from ..core.deps import get_auth_handler
from ..schemas.user import AuthResponse, LoginRequest, RegisterRequest
from ..services import AuthHandler

router = APIRouter()


@router.post("/login", response_model=AuthResponse)
def login(credentials: LoginRequest, handler: AuthHandler = Depends(get_auth_handler)):
    """Check a username/password pair and return the user's identity"""
    user = handler.login(credentials.username, credentials.password)
    return {"user": user}


@router.post("/register", response_model=AuthResponse)
def register(user_in: RegisterRequest, handler: AuthHandler = Depends(get_auth_handler)):
    """Create a new user and return its identity"""
    user = handler.register(user_in)
    return {"user": user}
