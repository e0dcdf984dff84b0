"""Signal handlers for files app."""

import logging
from functools import partial

from django.db import transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver

from server.apps.files.infrastructure.storage import get_storage
from server.apps.files.models import File

logger = logging.getLogger(__name__)


@receiver(post_delete, sender=File)
def discard_stored_object(
    sender: type[File],
    instance: File,
    **kwargs: object,
) -> None:
    """Discard the stored object once a File record is deleted.

    Runs for every way a row disappears (logic layer, folder cascade,
    admin, user deletion). The object is only touched after the
    surrounding transaction commits, so a rollback never leaves a
    record pointing at a missing object.

    Args:
        sender: The File model class.
        instance: The File instance being deleted.
        **kwargs: Additional signal arguments.
    """
    if not instance.blob:
        return

    storage_key = instance.blob.name
    logger.debug('Scheduling storage cleanup after commit: %s', storage_key)
    transaction.on_commit(partial(get_storage().discard, storage_key))
