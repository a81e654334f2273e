# app/core/rbac.py
from fastapi import Depends, HTTPException, status
from app.api.deps import get_current_user

ROLE_ADMIN = "admin"
ROLE_EDUCATOR = "educator"
ROLE_FAMILY = "family"

ROLE_NAMES = [ROLE_ADMIN, ROLE_EDUCATOR, ROLE_FAMILY]

_HIERARCHY = [ROLE_FAMILY, ROLE_EDUCATOR, ROLE_ADMIN]
_RANK = {name: idx for idx, name in enumerate(_HIERARCHY)}

def require_roles(*roles: str):
    allowed = set(roles)
    def dep(user = Depends(get_current_user)):
        if user.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
        return user
    return dep

def require_min_role(min_role: str):
    if min_role not in _RANK:
        raise RuntimeError(f"Unknown role: {min_role}")
    need = _RANK[min_role]
    def dep(user = Depends(get_current_user)):
        if _RANK.get(user.role, -1) >= need:
            return user
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
    return dep
