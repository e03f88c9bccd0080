"""Firestore persistence for shared view snapshots."""

import logging
import uuid
from pathlib import Path

from google.cloud import firestore
from google.oauth2 import service_account
from pydantic import ValidationError

from ontoview.config import settings
from ontoview.models.snapshot import ViewSnapshot

logger = logging.getLogger(__name__)

_client: firestore.Client | None = None


def _get_client() -> firestore.Client:
    global _client
    if _client is None:
        kwargs: dict = {}
        if settings.GCP_PROJECT_ID:
            kwargs["project"] = settings.GCP_PROJECT_ID
        sa_path = Path(settings.SERVICE_ACCOUNT_KEY_PATH)
        if sa_path.exists():
            kwargs["credentials"] = service_account.Credentials.from_service_account_file(
                str(sa_path)
            )
            logger.info("Using service account key for Firestore: %s", sa_path)
        _client = firestore.Client(**kwargs)
    return _client


def _collection() -> firestore.CollectionReference:
    return _get_client().collection(settings.FIRESTORE_COLLECTION)


def save_snapshot(snapshot: ViewSnapshot) -> str:
    snapshot_id = uuid.uuid4().hex[:10]
    document = snapshot.model_dump()
    document["created_at"] = firestore.SERVER_TIMESTAMP
    _collection().document(snapshot_id).set(document)
    logger.info("Saved view snapshot %s", snapshot_id)
    return snapshot_id


def load_snapshot(snapshot_id: str) -> ViewSnapshot | None:
    doc = _collection().document(snapshot_id).get()
    if not doc.exists:
        return None

    data = doc.to_dict() or {}
    data.pop("created_at", None)
    try:
        return ViewSnapshot.model_validate(data)
    except ValidationError:
        logger.exception("Snapshot %s is not a valid view snapshot", snapshot_id)
        return None
