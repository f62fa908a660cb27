import os

# Must be set before config.py is imported by the app module.
os.environ['DATABASE_URL'] = 'sqlite://'

import pytest
from bs4 import BeautifulSoup

from app import create_app
from models import db
from utils.storage import MemoryStorage
from utils.store import EventStore


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'SECRET_KEY': 'test',
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return EventStore(storage)


@pytest.fixture
def soup():
    def parse(response):
        return BeautifulSoup(response.get_data(as_text=True), 'html.parser')
    return parse
