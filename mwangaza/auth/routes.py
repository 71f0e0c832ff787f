from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Header
from mwangaza.auth.permissions import can_access
from mwangaza.auth.schemas import LoginRequest, Principal, StaffCreateRequest, TokenResponse
from mwangaza.auth.service import add_staff, authenticate, list_staff
from mwangaza.auth.utils import create_access_token, decode_access_token

router = APIRouter()


def get_principal_from_token(authorization: Optional[str]) -> Principal:
    """Helper function to extract and validate the principal from a JWT token"""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header"
        )

    token = authorization.split(" ")[1]
    return decode_access_token(token)


def get_current_principal(authorization: Optional[str] = Header(None)) -> Principal:
    """Get current authenticated staff member from JWT token"""
    return get_principal_from_token(authorization)


def require_access(resource: str, action: str):
    """Dependency factory: 403 unless the principal may perform action on resource"""
    def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not can_access(principal, resource, action):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You don't have access to this content."
            )
        return principal
    return dependency


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest):
    """Login staff member and return JWT token"""
    principal = authenticate(request.email, request.password)
    if principal is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    token = create_access_token(principal)
    return {
        "access_token": token,
        "token_type": "bearer",
        "username": principal.email,
        "full_name": principal.name,
        "role": principal.role,
    }


@router.get("/me", response_model=Principal)
def get_me(principal: Principal = Depends(get_current_principal)):
    """Get current staff member (protected route)"""
    return principal


@router.get("/staff", response_model=List[Principal])
def get_staff(principal: Principal = Depends(require_access("staff", "view"))):
    return list_staff()


@router.post("/staff", response_model=Principal, status_code=status.HTTP_201_CREATED)
def create_staff(
    request: StaffCreateRequest,
    principal: Principal = Depends(require_access("staff", "admin"))
):
    """Create a staff account (administrators only)"""
    try:
        return add_staff(request.full_name, request.email, request.password, request.role)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
