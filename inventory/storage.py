"""
Key/value blob storage for the serialized collections.

Every collection (menu, active orders, delivered orders) is one JSON array
stored under a well-known key. Writes replace the whole value in one call;
there is no locking between processes, so the last write on a key wins.
"""
import json
import logging

from .models import StorageEntry

logger = logging.getLogger(__name__)


class DatabaseStorage:
    """Keys live in StorageEntry rows."""

    def get_item(self, key):
        entry = StorageEntry.objects.filter(key=key).only("value").first()
        return entry.value if entry else None

    def set_item(self, key, value):
        StorageEntry.objects.update_or_create(key=key, defaults={"value": value})

    def remove_item(self, key):
        StorageEntry.objects.filter(key=key).delete()


class MemoryStorage:
    """Process-local storage, handy for scripts and tests."""

    def __init__(self, initial=None):
        self._data = dict(initial or {})

    def get_item(self, key):
        return self._data.get(key)

    def set_item(self, key, value):
        self._data[key] = value

    def remove_item(self, key):
        self._data.pop(key, None)


def read_collection(storage, key):
    """
    Return the JSON array stored under `key`.

    Missing keys give an empty list. Corrupt JSON, or a value that is not a
    list, is logged and also treated as empty.
    """
    raw = storage.get_item(key)
    if not raw:
        return []

    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Malformed JSON under storage key %r, treating as empty", key)
        return []

    if not isinstance(data, list):
        logger.warning("Storage key %r holds %s, expected a list", key, type(data).__name__)
        return []
    return data


def write_collection(storage, key, records):
    storage.set_item(key, json.dumps(list(records)))


def read_object(storage, key):
    raw = storage.get_item(key)
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Malformed JSON under storage key %r, ignoring", key)
        return None
    return data if isinstance(data, dict) else None


def write_object(storage, key, data):
    storage.set_item(key, json.dumps(data))
