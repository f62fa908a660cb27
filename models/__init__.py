from .database import db
from .storage_entry import StorageEntry
from .event import Event
from .registration import Registration

__all__ = ['db', 'StorageEntry', 'Event', 'Registration']
