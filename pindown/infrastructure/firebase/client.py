"""Realtime Database and identity clients (REST-based, no firebase-admin).

Built at app startup from settings, using either FIREBASE_SERVICE_ACCOUNT_KEY
(JSON string) or FIREBASE_SERVICE_ACCOUNT_PATH (file path). With
FIREBASE_EMULATOR=true no credentials are loaded.
"""

import json
import logging
from pathlib import Path

from pindown.core.config import Settings
from pindown.infrastructure.firebase._rest_client import (
    RealtimeDatabaseRESTClient,
    _get_credentials,
)
from pindown.infrastructure.firebase.document_store import DocumentStore
from pindown.infrastructure.firebase.identity import FirebaseIdentityVerifier

logger = logging.getLogger(__name__)


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path."""
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            raise ValueError(
                f"FIREBASE_SERVICE_ACCOUNT_PATH file not found: {path} (resolved: {resolved})"
            )
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def _project_id(settings: Settings, key_dict: dict | None) -> str:
    if settings.firebase_project_id:
        return settings.firebase_project_id
    if key_dict and key_dict.get("project_id"):
        return key_dict["project_id"]
    raise ValueError(
        "FIREBASE_PROJECT_ID is required when the service account has no project_id"
    )


def build_document_store(settings: Settings) -> DocumentStore:
    """Create the store client. Raises ValueError on unusable credentials."""
    credentials = None
    if not settings.firebase_emulator:
        key_dict = _load_key_dict(settings)
        if not key_dict:
            raise ValueError("No Firebase service account configured")
        credentials = _get_credentials(key_dict)
    client = RealtimeDatabaseRESTClient(
        settings.firebase_database_url,
        credentials,
        timeout=settings.store_timeout_seconds,
    )
    logger.info(
        "Realtime Database client ready (%s%s)",
        settings.firebase_database_url,
        ", emulator" if settings.firebase_emulator else "",
    )
    return DocumentStore(client)


def build_identity_verifier(settings: Settings) -> FirebaseIdentityVerifier:
    """Create the ID token verifier for the configured project."""
    key_dict = None if settings.firebase_emulator else _load_key_dict(settings)
    return FirebaseIdentityVerifier(_project_id(settings, key_dict))
