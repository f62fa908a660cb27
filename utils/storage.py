"""Key-value storage areas backing the event store."""

import logging

from sqlalchemy.exc import SQLAlchemyError

from models import db, StorageEntry

logger = logging.getLogger(__name__)


class StorageReadError(Exception):
    """A storage area could not be read, or held an unparsable blob."""


class StorageWriteError(Exception):
    """A blob could not be written to a storage area."""


class KeyValueStorage:
    """Interface for a string-keyed storage area holding text blobs."""

    def get(self, key):
        raise NotImplementedError

    def set(self, key, value):
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    """In-process storage area, used by tests and scripts."""

    def __init__(self, initial=None):
        self.data = dict(initial or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value


class SqlStorage(KeyValueStorage):
    """Storage area persisted as `StorageEntry` rows, one row per key."""

    def __init__(self, area):
        self.area = area

    def __repr__(self):
        return f'<SqlStorage {self.area}>'

    def _entry(self, key):
        return StorageEntry.query.filter_by(area=self.area, key=key).first()

    def get(self, key):
        try:
            entry = self._entry(key)
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageReadError(f'Could not read {key!r} from area {self.area}') from e
        return entry.value if entry else None

    def set(self, key, value):
        try:
            entry = self._entry(key)
            if entry:
                entry.value = value
            else:
                db.session.add(StorageEntry(area=self.area, key=key, value=value))
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.debug('Rolled back write of %r in area %s', key, self.area)
            raise StorageWriteError(f'Could not write {key!r} to area {self.area}') from e
