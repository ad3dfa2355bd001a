"""
Authentication module for user login.

Stands in for the external identity provider: demo accounts log in with a
shared password and receive a session token. The booking core only reads
the current user's id and name from here.
"""

import logging
import secrets
import hashlib
from datetime import datetime, timezone, timedelta
from typing import Optional, Dict, Any

from pydantic import BaseModel

from shared.sample_directory import find_sample_account
from use_cases.booking.domain.models import PatientIdentity

logger = logging.getLogger(__name__)


# =============================================================================
# MODELS
# =============================================================================

class LoginRequest(BaseModel):
    """Login request model."""
    email: str
    password: str


class LoginResponse(BaseModel):
    """Login response model."""
    success: bool
    message: str
    token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None


# =============================================================================
# PASSWORD UTILITIES
# =============================================================================

def hash_password(password: str) -> str:
    """
    Hash a password using SHA-256 with salt.

    Note: For production, use bcrypt or argon2. Real authentication belongs
    to the identity provider, not this app.
    """
    salt = "medicalapp_demo_salt_"
    salted = salt + password
    return hashlib.sha256(salted.encode()).hexdigest()


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    return secrets.compare_digest(hash_password(password), password_hash)


def generate_session_token() -> str:
    """Generate a secure session token."""
    return secrets.token_urlsafe(32)


# Default password for all demo accounts (for easy testing)
DEFAULT_PASSWORD = "123456"
DEFAULT_PASSWORD_HASH = hash_password(DEFAULT_PASSWORD)


def authenticate(email: str, password: str) -> Optional[Dict[str, Any]]:
    """Return the account for valid demo credentials, or None."""
    account = find_sample_account(email)
    if not account:
        return None
    if not verify_password(password, account.get("password_hash", DEFAULT_PASSWORD_HASH)):
        return None
    return account


# =============================================================================
# SESSION STORE (In-Memory for Demo)
# =============================================================================

_sessions: Dict[str, Dict[str, Any]] = {}


def create_session(user_data: Dict[str, Any]) -> str:
    """Create a new session for a user and return the token."""
    token = generate_session_token()

    _sessions[token] = {
        "user_id": user_data["id"],
        "name": user_data.get("name", ""),
        "email": user_data.get("email", ""),
        "role": user_data.get("role", "patient"),
        "created_at": datetime.now(timezone.utc).isoformat(),
        "expires_at": (datetime.now(timezone.utc) + timedelta(hours=24)).isoformat(),
    }

    logger.info(f"Created session for user {user_data['id']}")
    return token


def get_session(token: str) -> Optional[Dict[str, Any]]:
    """Get session data for a token, or None if invalid/expired."""
    if not token or token not in _sessions:
        return None

    session = _sessions[token]

    expires_at = datetime.fromisoformat(session["expires_at"])
    if datetime.now(timezone.utc) > expires_at:
        del _sessions[token]
        return None

    return session


def delete_session(token: str) -> bool:
    """Delete a session (logout)."""
    if token in _sessions:
        del _sessions[token]
        return True
    return False


def get_identity(token: str) -> Optional[PatientIdentity]:
    """The id and display name of the user behind a token."""
    session = get_session(token)
    if not session:
        return None
    return PatientIdentity(id=session["user_id"], name=session["name"])
