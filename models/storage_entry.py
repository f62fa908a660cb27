from datetime import datetime
from .database import db


class StorageEntry(db.Model):
    """One key of a visitor's key-value storage area."""

    __tablename__ = 'storage_entries'
    __table_args__ = (
        db.UniqueConstraint('area', 'key', name='uq_storage_area_key'),
    )

    id = db.Column(db.Integer, primary_key=True)
    area = db.Column(db.String(100), nullable=False, index=True)  # guest_id of the visitor
    key = db.Column(db.String(100), nullable=False)  # 'events', 'registrations'
    value = db.Column(db.Text, nullable=False)  # serialized JSON blob
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<StorageEntry {self.area}:{self.key}>'

