import json
from typing import Optional

import keyring
import keyring.errors

from .errors import StoreUnavailableError
from .models import UserSession
from .store import KEYRING_SERVICE

USER_KEY = "@gofinances:user"


def sign_in(user: UserSession) -> None:
    """Save the user session to keyring"""
    payload = json.dumps({"id": user.id, "name": user.name, "photo": user.photo})
    try:
        keyring.set_password(KEYRING_SERVICE, USER_KEY, payload)
    except keyring.errors.KeyringError as e:
        raise StoreUnavailableError(f"Could not save session: {e}") from e


def get_current_user() -> Optional[UserSession]:
    """Restore the saved user session. Returns None if not available/invalid.

    Raises:
        StoreUnavailableError: If the keyring backend fails
    """
    try:
        payload = keyring.get_password(KEYRING_SERVICE, USER_KEY)
    except keyring.errors.KeyringError as e:
        raise StoreUnavailableError(f"Could not read session: {e}") from e
    if not payload:
        return None

    try:
        data = json.loads(payload)
        return UserSession(
            id=str(data["id"]), name=data.get("name", ""), photo=data.get("photo")
        )
    except (ValueError, KeyError, TypeError):
        return None


def sign_out() -> None:
    """
    Clear the stored user session.
    """
    user = get_current_user()
    try:
        keyring.delete_password(KEYRING_SERVICE, USER_KEY)
    except keyring.errors.PasswordDeleteError:
        print("No session found.")
        return
    except keyring.errors.KeyringError as e:
        raise StoreUnavailableError(f"Could not clear session: {e}") from e

    if user:
        print(f"✓ Signed out {user.name or user.id}")
    else:
        print("✓ Cleared session")
