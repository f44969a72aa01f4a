"""
Background tasks for stored files
"""
from bizdesk.core.celery import celery_app
from bizdesk.modules.files.storage import get_storage
import logging

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3)
def purge_stored_object(self, storage_key: str):
    """
    Remove a blob from MinIO after its document record was deleted.
    Retried when MinIO reports an error.
    """
    logger.info(f"Purging stored object {storage_key}")
    if not get_storage().remove(storage_key):
        raise self.retry(countdown=60)
    return {"status": "deleted", "key": storage_key}
