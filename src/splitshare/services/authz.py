from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
from typing import Optional

from splitshare.models import Calculation


class AuthorizationError(PermissionError):
    pass


def generate_admin_token() -> str:
    # 32 bytes of entropy, url-safe base64 without padding
    return base64.urlsafe_b64encode(secrets.token_bytes(32)).rstrip(b"=").decode("ascii")


def hash_admin_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def safe_equal_hash(a: str, b: str) -> bool:
    a_bytes = a.encode("utf-8")
    b_bytes = b.encode("utf-8")
    if len(a_bytes) != len(b_bytes):
        return False
    return hmac.compare_digest(a_bytes, b_bytes)


def has_valid_admin(calculation: Calculation, token: Optional[str]) -> bool:
    """A calculation without admins is open; otherwise the token must match one of them."""
    if not calculation.admins:
        return True
    if not token:
        return False
    token_hash = hash_admin_token(token)
    return any(safe_equal_hash(admin.token_hash, token_hash) for admin in calculation.admins)


def assert_admin(calculation: Calculation, token: Optional[str]) -> None:
    if not calculation.admins:
        return
    if not token:
        raise AuthorizationError("Admin token required")
    if not has_valid_admin(calculation, token):
        raise AuthorizationError("Invalid admin token")
