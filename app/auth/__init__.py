# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Session-based authentication: bcrypt password checks, server-side sessions,
# signed session tokens carried in a cookie or Bearer header.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser

__all__ = [
    "get_current_user",
    "AuthUser",
]
