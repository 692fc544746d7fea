from datetime import datetime, timedelta, timezone
from typing import Tuple

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt

from storefront.core.config import settings
from storefront.errors import Unauthenticated

security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "ADMIN"

def create_access_token(user_id: str, role: str = "USER") -> Tuple[str, datetime]:
    exp = datetime.now(timezone.utc) + timedelta(seconds=settings.ACCESS_TOKEN_EXPIRES_SECONDS)
    payload = {"sub": user_id, "role": role, "exp": exp, "type": "access"}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM), exp

def get_current_identity(creds: HTTPAuthorizationCredentials = Depends(security)) -> dict:
    if not creds:
        raise HTTPException(status_code=401, detail=Unauthenticated().to_detail())
    try:
        payload = jwt.decode(creds.credentials, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail={"error": "Invalid token"})
    if payload.get("type") != "access" or not payload.get("sub"):
        raise HTTPException(status_code=401, detail={"error": "Invalid access token"})
    return payload  # contains sub (user id), role

def require_admin(identity: dict = Depends(get_current_identity)):
    if identity.get("role") != ADMIN_ROLE:
        raise HTTPException(status_code=403, detail={"error": "Admin only"})
    return identity
