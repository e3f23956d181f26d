"""Process-wide Firestore client built from settings.

Initialized once using either FIREBASE_SERVICE_ACCOUNT_KEY (JSON string)
or FIREBASE_SERVICE_ACCOUNT_PATH (file path). The project id comes from
FIRESTORE_PROJECT_ID or, when unset, from the service account.
"""

import json
import logging
from pathlib import Path

from firelite.core.config import get_settings
from firelite.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

logger = logging.getLogger(__name__)

_firestore_client: FirestoreRESTClient | None = None


def _load_key_dict() -> dict | None:
    """Read the service account from the inline key, else from the key file.

    Returns None when neither is configured or the key file is missing.

    Raises:
        ValueError: If the configured key is not valid JSON.
    """
    settings = get_settings()
    inline = settings.firebase_service_account_key
    if inline and inline.get_secret_value():
        raw, source = inline.get_secret_value(), "FIREBASE_SERVICE_ACCOUNT_KEY"
    elif settings.firebase_service_account_path:
        key_file = Path(settings.firebase_service_account_path).expanduser()
        if not key_file.is_file():
            logger.warning("Service account file %s does not exist", key_file)
            return None
        raw, source = key_file.read_text(encoding="utf-8"), str(key_file)
    else:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"{source} is not valid JSON") from e


def init_firestore() -> bool:
    """Initialize the process-wide Firestore client.

    Safe to call when no credentials are configured (no-op). Idempotent if
    already initialized. On malformed credentials or any initialization
    error, logs the exception and returns False.

    Returns:
        True if the client is available, False if unconfigured or on error.
    """
    global _firestore_client
    if _firestore_client is not None:
        return True
    try:
        key_dict = _load_key_dict()
        if not key_dict:
            return False

        settings = get_settings()
        project_id = settings.firestore_project_id or key_dict.get("project_id")
        if not project_id:
            logger.error("No FIRESTORE_PROJECT_ID and service account JSON missing 'project_id'")
            return False

        api_key = settings.firestore_api_key.get_secret_value() if settings.firestore_api_key else None
        _firestore_client = FirestoreRESTClient(
            project_id,
            _get_credentials(key_dict),
            database_id=settings.firestore_database_id,
            base_url=settings.firestore_base_url,
            api_key=api_key,
            timeout=settings.request_timeout_seconds,
        )
        logger.info(
            "Firestore client initialized for project %s, database %s",
            project_id,
            settings.firestore_database_id,
        )
        return True
    except Exception:
        logger.exception("Firestore initialization failed")
        return False


def get_firestore_client() -> FirestoreRESTClient | None:
    """Return the Firestore client, or None if not configured."""
    return _firestore_client


async def close_firestore() -> None:
    """Close the Firestore client's HTTP connection pool."""
    global _firestore_client
    if _firestore_client is not None:
        await _firestore_client.aclose()
        _firestore_client = None
        logger.info("Firestore HTTP client closed")
