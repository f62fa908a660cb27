from datetime import datetime, timezone


def utc_timestamp(now=None):
    """ISO-8601 UTC instant with millisecond precision, e.g. 2025-11-01T09:30:00.000Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_timestamp(value):
    """Parse a stored `when` string back into an aware datetime."""
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class Registration:
    """A student's registration for an event."""

    def __init__(self, event_id, student_id, when):
        self.event_id = event_id
        self.student_id = student_id
        self.when = when

    def __repr__(self):
        return f'<Registration {self.student_id} - Event {self.event_id}>'

    def __eq__(self, other):
        if not isinstance(other, Registration):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @property
    def registered_at(self):
        return parse_timestamp(self.when)

    def to_dict(self):
        return {
            'eventId': self.event_id,
            'studentId': self.student_id,
            'when': self.when
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            event_id=data['eventId'],
            student_id=data['studentId'],
            when=data['when']
        )
