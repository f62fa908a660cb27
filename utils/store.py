"""Persistence of the events and registrations collections."""

import json
import logging

from models import Event, Registration
from .storage import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)

EVENTS_KEY = 'events'
REGISTRATIONS_KEY = 'registrations'

SEED_EVENTS = [
    {'id': 'E001', 'name': 'Tech Talk', 'category': 'Technical', 'date': '2025-11-01'},
    {'id': 'E002', 'name': 'Cultural Fest', 'category': 'Cultural', 'date': '2025-11-10'},
    {'id': 'E003', 'name': 'Coding Hackathon', 'category': 'Technical', 'date': '2025-11-15'},
]


def serialize(records):
    return json.dumps([record.to_dict() for record in records], separators=(',', ':'))


def deserialize(raw, record_cls):
    """Parse a stored blob into records, raising StorageReadError on any malformed content."""
    try:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError(f'expected a list, got {type(data).__name__}')
        return [record_cls.from_dict(item) for item in data]
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise StorageReadError(f'Malformed {record_cls.__name__} blob: {e}') from e


class EventStore:
    """Events and registrations kept as two JSON blobs in one storage area."""

    def __init__(self, storage):
        self.storage = storage

    def _read(self, key, record_cls):
        raw = self.storage.get(key)
        if raw is None:
            return None
        return deserialize(raw, record_cls)

    def seed(self):
        """Write the sample events and return them."""
        events = [Event.from_dict(item) for item in SEED_EVENTS]
        self.save_events(events)
        return events

    def ensure_seeded(self):
        """Seed the area unless an events blob already exists. Safe to call repeatedly."""
        if self.storage.get(EVENTS_KEY) is None:
            logger.info('Seeding events for %r', self.storage)
            self.seed()
            return True
        return False

    def load_events(self):
        try:
            events = self._read(EVENTS_KEY, Event)
        except StorageReadError as e:
            logger.error('Error reading events from storage: %s', e)
            events = None
        if events is not None:
            return events

        try:
            return self.seed()
        except StorageWriteError as e:
            logger.warning('Could not persist seed events: %s', e)
            return [Event.from_dict(item) for item in SEED_EVENTS]

    def save_events(self, events):
        self.storage.set(EVENTS_KEY, serialize(events))

    def load_registrations(self, fallback=True):
        """
        Read all registrations.

        A missing blob is an empty collection. A malformed blob is logged and
        treated as empty, unless fallback is False, in which case the
        StorageReadError propagates.
        """
        try:
            registrations = self._read(REGISTRATIONS_KEY, Registration)
        except StorageReadError as e:
            if not fallback:
                raise
            logger.error('Error reading registrations: %s', e)
            return []
        return registrations or []

    def save_registrations(self, registrations):
        self.storage.set(REGISTRATIONS_KEY, serialize(registrations))

    def append_registration(self, registration):
        registrations = self.load_registrations(fallback=False)
        registrations.append(registration)
        self.save_registrations(registrations)
        return registration
