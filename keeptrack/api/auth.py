# keeptrack/api/auth.py

from fastapi import APIRouter, HTTPException, status, Depends

from keeptrack.api.deps import get_auth_service, get_current_user
from keeptrack.core.security import TokenPayload
from keeptrack.core.services import AuthService
from keeptrack.models.schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
)


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    return service.register(data)


@router.post("/login", response_model=AuthResponse)
def login(data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    return service.login(data)


@router.get("/me", response_model=ProfileResponse)
def read_users_me(
    current_user: TokenPayload = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    user = service.get_user_by_id(current_user.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"user": user}


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: TokenPayload = Depends(get_current_user)):
    """
    Tokens are stateless; the client discards its copy.
    """
    return {"message": "Logged out successfully"}
