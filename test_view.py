import json
from datetime import datetime, timezone

import pytest

from models import Registration
from utils import controller, view
from utils.event_state import DuplicateEventError, EventValidationError
from utils.storage import MemoryStorage, StorageWriteError
from utils.store import EventStore, EVENTS_KEY, REGISTRATIONS_KEY

NOW = datetime(2025, 11, 5, 12, 0, tzinfo=timezone.utc)


class RegistrationWriteFails(MemoryStorage):
    def set(self, key, value):
        if key == REGISTRATIONS_KEY:
            raise StorageWriteError('quota exceeded')
        super().set(key, value)


def stored_ids(storage):
    return [e['id'] for e in json.loads(storage.get(EVENTS_KEY))]


def test_add_event_scenario(store, storage):
    store.ensure_seeded()
    quiz = {'id': 'E004', 'name': 'Quiz', 'category': 'Technical', 'date': '2025-12-01'}

    controller.add_event(store, quiz)
    assert stored_ids(storage) == ['E001', 'E002', 'E003', 'E004']

    with pytest.raises(DuplicateEventError):
        controller.add_event(store, quiz)
    assert len(stored_ids(storage)) == 4


def test_add_event_with_blank_field_changes_nothing(store, storage):
    store.ensure_seeded()
    with pytest.raises(EventValidationError):
        controller.add_event(store, {'id': 'E004', 'name': '', 'date': '2025-12-01'})
    assert len(stored_ids(storage)) == 3


def test_remove_event_requires_confirmation(store, storage):
    store.ensure_seeded()

    assert controller.remove_event(store, 'E002', confirmed=False) is False
    assert len(stored_ids(storage)) == 3

    assert controller.remove_event(store, 'E002', confirmed=True) is True
    assert stored_ids(storage) == ['E001', 'E003']


def test_register_event_scenario(store):
    before = len(store.load_registrations())

    controller.register_event(store, 'E001', 'Tech Talk', 'S100')

    regs = store.load_registrations()
    assert len(regs) == before + 1
    assert regs[-1].event_id == 'E001'
    assert regs[-1].student_id == 'S100'
    assert regs[-1].registered_at.tzinfo is not None


@pytest.mark.parametrize('student_id', [None, '', '   '])
def test_register_event_cancelled(store, storage, student_id):
    with pytest.raises(controller.RegistrationCancelled, match='Registration cancelled.'):
        controller.register_event(store, 'E001', 'Tech Talk', student_id)
    assert storage.get(REGISTRATIONS_KEY) is None


def test_register_event_swallows_write_failure(caplog):
    store = EventStore(RegistrationWriteFails())

    registration = controller.register_event(store, 'E001', 'Tech Talk', 'S100')

    assert registration.student_id == 'S100'
    assert store.load_registrations() == []
    assert 'Could not save registration locally' in caplog.text


def test_success_message_names_event_and_student():
    assert controller.registration_success_message('E001', 'Tech Talk', 'S100') == (
        'You have successfully registered for Tech Talk (Event ID: E001) with Student ID: S100.')


def test_render_stats_only_fills_present_regions(store):
    stats = view.render_stats(store, {view.TOTAL_EVENTS}, now=NOW)
    assert stats == {view.TOTAL_EVENTS: '3'}
    assert view.render_stats(store, set(), now=NOW) == {}


def test_render_stats_placeholder_on_corrupt_registrations(store, storage):
    storage.set(REGISTRATIONS_KEY, 'nope')
    stats = view.render_stats(store, view.STATS_REGIONS, now=NOW)
    assert stats == {
        view.TOTAL_EVENTS: '3',
        view.TOTAL_STUDENTS: '120',
        view.UPCOMING_EVENTS: '2',
    }


def test_render_events_fills_only_present_lists(store):
    admin = view.render_events(store, view.ADMIN_PAGE, now=NOW)
    assert [e.id for e in admin['admin_events']] == ['E001', 'E002', 'E003']
    assert admin['public_events'] is None
    assert admin['stats'][view.TOTAL_EVENTS] == '3'

    public = view.render_events(store, view.PUBLIC_PAGE, now=NOW)
    assert public['admin_events'] is None
    assert len(public['public_events']) == 3


def test_build_page_without_event_regions_renders_stats_only(store):
    page = view.build_page(store, view.INDEX_PAGE, now=NOW)
    assert page['admin_events'] is None
    assert page['public_events'] is None
    assert set(page['stats']) == view.STATS_REGIONS


def test_toggle_detail_flips_visibility():
    expanded, shown = view.toggle_registrations_detail([], 'E001')
    assert (expanded, shown) == (['E001'], True)
    expanded, shown = view.toggle_registrations_detail(expanded, 'E001')
    assert (expanded, shown) == ([], False)


def test_detail_is_refetched_on_every_show(store):
    expanded, _ = view.toggle_registrations_detail([], 'E001')
    first = view.render_events(store, view.ADMIN_PAGE, expanded)['details']['E001']
    assert first['items'] == []
    assert first['message'] == 'No registrations yet.'

    expanded, _ = view.toggle_registrations_detail(expanded, 'E001')
    store.append_registration(Registration('E001', 'S7', '2025-10-01T10:00:00.000Z'))
    expanded, _ = view.toggle_registrations_detail(expanded, 'E001')

    detail = view.render_events(store, view.ADMIN_PAGE, expanded)['details']['E001']
    assert detail['region'] == 'regs-E001'
    assert detail['items'] == [{'student_id': 'S7', 'when': '2025-10-01 10:00:00 UTC'}]
    assert detail['message'] is None


def test_format_when_passes_through_unparseable_values():
    assert view.format_when('yesterday') == 'yesterday'
