"""Pure state transitions over the events and registrations collections."""

from datetime import datetime, timezone

from models import Event

MISSING_FIELDS_MESSAGE = 'Please fill in Event ID, Name and Date.'
DUPLICATE_ID_MESSAGE = 'An event with that ID already exists. Choose a unique ID.'
REGISTRATIONS_PLACEHOLDER = 120


class EventValidationError(ValueError):
    """Raised when event input is rejected. The message is shown to the user."""


class DuplicateEventError(EventValidationError):
    pass


def clean_text(value):
    """Trimmed text form of a form or JSON field; None is empty."""
    if value is None:
        return ''
    return str(value).strip()


def build_event(data):
    """Build an Event from raw form or JSON input, trimming whitespace."""
    event_id = clean_text(data.get('id'))
    name = clean_text(data.get('name'))
    date = clean_text(data.get('date'))
    if not event_id or not name or not date:
        raise EventValidationError(MISSING_FIELDS_MESSAGE)
    return Event(id=event_id, name=name, category=clean_text(data.get('category')), date=date)


def find_event(events, event_id):
    return next((e for e in events if e.id == event_id), None)


def add_event(events, event):
    """Return a new collection with event appended."""
    if find_event(events, event.id):
        raise DuplicateEventError(DUPLICATE_ID_MESSAGE)
    return list(events) + [event]


def remove_event(events, event_id):
    return [e for e in events if e.id != event_id]


def append_registration(registrations, registration):
    return list(registrations) + [registration]


def registrations_for(registrations, event_id):
    return [r for r in registrations if r.event_id == event_id]


def event_start(event):
    """Midnight UTC of the event's date, or None when the date does not parse."""
    try:
        day = datetime.strptime(event.date, '%Y-%m-%d')
    except (TypeError, ValueError):
        return None
    return day.replace(tzinfo=timezone.utc)


def is_upcoming(event, now):
    start = event_start(event)
    return start is not None and start >= now


def compute_stats(events, registrations, now=None, placeholder=REGISTRATIONS_PLACEHOLDER):
    """
    Summary counters for the stats regions.

    registrations is None when the registrations blob could not be read; the
    placeholder is reported instead.
    """
    now = now or datetime.now(timezone.utc)
    return {
        'total_events': len(events),
        'total_registrations': placeholder if registrations is None else len(registrations),
        'upcoming_events': sum(1 for e in events if is_upcoming(e, now)),
    }
