"""User-triggered mutations shared by the HTML pages and the JSON API."""

import logging

from models import Registration
from models.registration import utc_timestamp
from . import event_state
from .storage import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)

EVENT_ADDED_MESSAGE = 'Event added.'
REMOVE_CONFIRMATION_MESSAGE = 'Remove this event?'
REGISTRATION_CANCELLED_MESSAGE = 'Registration cancelled.'


class RegistrationCancelled(ValueError):
    """No student id was given, so nothing was recorded."""

    def __init__(self, message=REGISTRATION_CANCELLED_MESSAGE):
        super().__init__(message)


def registration_success_message(event_id, event_name, student_id):
    return (f'You have successfully registered for {event_name} '
            f'(Event ID: {event_id}) with Student ID: {student_id}.')


def add_event(store, data):
    """Validate input and persist a new event. Raises EventValidationError on rejection."""
    event = event_state.build_event(data)
    events = event_state.add_event(store.load_events(), event)
    store.save_events(events)
    logger.info('Added event %s', event.id)
    return event


def remove_event(store, event_id, confirmed):
    """Drop an event once the user has confirmed. Returns False when declined."""
    if not confirmed:
        return False
    events = store.load_events()
    store.save_events(event_state.remove_event(events, event_id))
    logger.info('Removed event %s', event_id)
    return True


def register_event(store, event_id, event_name, student_id):
    """
    Record a registration for event_id.

    Raises RegistrationCancelled when student_id is empty. Storage failures
    are logged and otherwise ignored; the returned Registration is what was
    attempted.
    """
    student_id = event_state.clean_text(student_id)
    if not student_id:
        raise RegistrationCancelled()

    registration = Registration(event_id=event_id, student_id=student_id, when=utc_timestamp())
    try:
        store.append_registration(registration)
    except (StorageReadError, StorageWriteError) as e:
        logger.warning('Could not save registration locally: %s', e)
    return registration
