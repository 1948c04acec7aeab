from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from pantrychef.database import get_db
from pantrychef.routers.base import api_router
from pantrychef.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest
from pantrychef.schemas.recipe import ApiResponse
from pantrychef.services.auth_service import AuthService

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security), db: Session = Depends(get_db)):
    try:
        service = AuthService(db)
        return service.validate_token(credentials.credentials)
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e))


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    db: Session = Depends(get_db)
) -> Optional[dict]:
    """Like get_current_user, but anonymous callers get None instead of a 401."""
    if credentials is None:
        return None
    return get_current_user(credentials, db)


@api_router.post("/register", status_code=status.HTTP_201_CREATED, response_model=ApiResponse)
def register_user(request: RegisterRequest, db: Session = Depends(get_db)):
    try:
        service = AuthService(db)
        result = service.register_user(request)
        return ApiResponse(status=True, message="Registration complete. User created.", data=result)
    except ValueError as e:
        if "already exists" in str(e):
            raise HTTPException(status_code=409, detail=str(e))
        raise HTTPException(status_code=422, detail=str(e))


@api_router.post("/login", response_model=ApiResponse)
def login_user(request: LoginRequest, http_request: Request, db: Session = Depends(get_db)):
    try:
        service = AuthService(db)
        result = service.login_user(request, http_request)
        return ApiResponse(status=True, message="Welcome! You've successfully logged in.", data=result)
    except PermissionError as e:
        raise HTTPException(status_code=401, detail=str(e))


@api_router.post("/refresh-token", response_model=ApiResponse)
def refresh_token_endpoint(request: RefreshRequest, db: Session = Depends(get_db)):
    try:
        service = AuthService(db)
        tokens = service.refresh_token(request)
        return ApiResponse(status=True, message="Token refreshed", data=tokens)
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e))


@api_router.get("/user", response_model=ApiResponse)
def current_user_profile(db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    try:
        service = AuthService(db)
        user = service.get_user(current_user["user_id"])
        return ApiResponse(status=True, message="You are authenticated", data=user)
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e))


@api_router.post("/logout", response_model=ApiResponse)
def logout_user(db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    try:
        service = AuthService(db)
        service.logout(current_user["session_id"])
        return ApiResponse(status=True, message="You have been logged out.")
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e))
