from datetime import datetime, timedelta, timezone
import bcrypt
from jose import JWTError, jwt
from fastapi import HTTPException, status
from mwangaza.core.config import settings
from mwangaza.auth.schemas import Principal

def _to_bcrypt_secret(password: str) -> bytes:
    # bcrypt only uses the first 72 bytes of the password
    password_bytes = password.encode('utf-8')
    if len(password_bytes) > 72:
        password_bytes = password_bytes[:72]
    return password_bytes

def hash_password(password: str) -> str:
    """Hash a password using bcrypt"""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(_to_bcrypt_secret(password), salt)
    return hashed.decode('utf-8')

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    return bcrypt.checkpw(_to_bcrypt_secret(plain_password), hashed_password.encode('utf-8'))

def create_access_token(principal: Principal) -> str:
    """Create a JWT access token carrying the principal"""
    expiry = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    payload = {
        "sub": principal.id,
        "name": principal.name,
        "email": principal.email,
        "role": principal.role,
        "department": principal.department,
        "exp": expiry
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

def decode_access_token(token: str) -> Principal:
    """Decode and verify a JWT token"""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return Principal(
            id=payload["sub"],
            name=payload["name"],
            email=payload["email"],
            role=payload["role"],
            department=payload["department"],
        )
    except (JWTError, KeyError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token"
        )
