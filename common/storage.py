"""
Blob storage helpers.
Files go through Django's default_storage; callers get back a download URL.
"""
import logging
from django.core.files.storage import default_storage
from core.exceptions import StorageError

logger = logging.getLogger(__name__)


def upload_file(fileobj, path: str) -> str:
    """
    Store fileobj at path, replacing any previous file there.

    Returns:
        Public URL of the stored file

    Raises:
        StorageError: If the storage backend fails
    """
    try:
        if default_storage.exists(path):
            default_storage.delete(path)
        name = default_storage.save(path, fileobj)
        return default_storage.url(name)
    except OSError as e:
        logger.error(f"Upload failed for {path}: {str(e)}", exc_info=True)
        raise StorageError(message="File upload failed", details={'path': path}) from e
