class Event:
    """An event as stored in the `events` blob."""

    def __init__(self, id, name, category='', date=''):
        self.id = id
        self.name = name
        self.category = category or ''
        self.date = date

    def __repr__(self):
        return f'<Event {self.id}: {self.name}>'

    def __eq__(self, other):
        if not isinstance(other, Event):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @property
    def display_category(self):
        return self.category or 'General'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'date': self.date
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            name=data['name'],
            category=data.get('category') or '',
            date=data.get('date', '')
        )
