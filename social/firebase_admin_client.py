"""Firebase Admin client helpers with test-safe behaviors."""

import logging
import os
import sys
import firebase_admin
from firebase_admin import credentials, auth, firestore
from firebase_admin import exceptions as firebase_exceptions

logger = logging.getLogger(__name__)

def _is_mock(obj) -> bool:
    """Return True when obj is a unittest.mock sentinel."""
    return "unittest.mock" in getattr(type(obj), "__module__", "")

def _env_truthy(name: str, default: str = "false") -> bool:
    """Return True when env var is set to a truthy value."""
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "y", "on")

def _is_running_tests():
    """
    Return True when Django is executing the test suite.
    Keeps Firebase from attempting network calls during tests.
    """
    return any(arg in sys.argv for arg in ["test", "pytest"]) or "pytest" in sys.modules

def _should_log() -> bool:
    """Silence noisy Firebase logs during tests unless explicitly enabled."""
    return not _is_running_tests() or _env_truthy("FIREBASE_VERBOSE_TEST_LOGS")

def _should_skip_app_init() -> bool:
    """Skip Firebase init during tests unless explicitly enabled or mocked."""
    if not _is_running_tests():
        return False
    if _env_truthy("FIREBASE_ALLOW_TEST_APP"):
        return False
    return not _is_mock(firebase_admin.initialize_app)

def _load_credential():
    cred_path = os.getenv("FIREBASE_SERVICE_ACCOUNT_FILE")
    if not cred_path or not os.path.exists(cred_path):
        if _should_log():
            logger.warning("FIREBASE_SERVICE_ACCOUNT_FILE not found. Firebase features disabled.")
        return None
    return credentials.Certificate(cred_path)

def _init_app(cred):
    try:
        return firebase_admin.initialize_app(cred)
    except (ValueError, OSError) as e:
        if _should_log():
            logger.error("Failed to initialize Firebase: %s", e)
        return None

_app = None

def get_app():
    """
    Lazily initialise the Firebase Admin app.
    Returns None if credentials are missing or invalid.
    """
    global _app
    if _app:
        return _app
    if firebase_admin._apps:
        _app = firebase_admin.get_app()
        return _app
    if _should_skip_app_init():
        return None

    cred = _load_credential()
    if not cred:
        return None

    _app = _init_app(cred)
    return _app

def get_firestore_client():
    """Firestore client, or None when disabled, unconfigured or under test."""
    if not _env_truthy("FIREBASE_ENABLE_FIRESTORE", "true"):
        return None
    if _is_running_tests():
        return None
    app = get_app()
    if not app:
        return None
    return firestore.client(app)

def verify_id_token(id_token):
    """Decode a Firebase ID token; raises the firebase_admin auth errors on failure."""
    return auth.verify_id_token(id_token, app=get_app())

def _claims_enabled() -> bool:
    if _is_mock(auth.set_custom_user_claims):
        return True
    if _is_running_tests() and not _env_truthy("FIREBASE_ALLOW_TEST_AUTH"):
        return False
    return get_app() is not None

def set_role_claim(uid: str, role: str) -> bool:
    """
    Push the user's role to the identity provider as a custom claim.

    Best effort: the database row is the source of truth, so a failure is
    logged and reported as False rather than raised.
    """
    if not uid or not _claims_enabled():
        return False
    try:
        auth.set_custom_user_claims(uid, {"role": role})
    except (firebase_exceptions.FirebaseError, ValueError) as e:
        if _should_log():
            logger.warning("Setting role claim for %s failed: %s", uid, e)
        return False
    return True
