"""Page context for the admin and public surfaces.

Pages declare the regions they contain; each builder only fills the regions
that are present, so the same functions serve every page.
"""

import logging

from models.registration import parse_timestamp
from .event_state import compute_stats, registrations_for, REGISTRATIONS_PLACEHOLDER
from .storage import StorageReadError

logger = logging.getLogger(__name__)

ADMIN_LIST = 'eventList'
PUBLIC_LIST = 'events-list'
EVENT_FORM = 'eventForm'
TOTAL_EVENTS = 'total-events'
TOTAL_STUDENTS = 'total-students'
UPCOMING_EVENTS = 'upcoming-events'

STATS_REGIONS = frozenset({TOTAL_EVENTS, TOTAL_STUDENTS, UPCOMING_EVENTS})
EVENT_REGIONS = frozenset({ADMIN_LIST, PUBLIC_LIST, EVENT_FORM})

INDEX_PAGE = STATS_REGIONS
ADMIN_PAGE = STATS_REGIONS | {ADMIN_LIST, EVENT_FORM}
PUBLIC_PAGE = STATS_REGIONS | {PUBLIC_LIST}

NO_REGISTRATIONS_MESSAGE = 'No registrations yet.'


def detail_region_id(event_id):
    return f'regs-{event_id}'


def format_when(value):
    """Human readable form of a registration timestamp."""
    try:
        return parse_timestamp(value).strftime('%Y-%m-%d %H:%M:%S UTC')
    except (TypeError, ValueError, AttributeError):
        return value


def registrations_detail(store, event_id):
    """Contents of an event's detail region, read fresh from the store."""
    regs = registrations_for(store.load_registrations(), event_id)
    return {
        'region': detail_region_id(event_id),
        'event_id': event_id,
        'items': [
            {'student_id': r.student_id, 'when': format_when(r.when)} for r in regs
        ],
        'message': None if regs else NO_REGISTRATIONS_MESSAGE,
    }


def toggle_registrations_detail(expanded, event_id):
    """Flip visibility of an event's detail region. Returns (expanded ids, shown)."""
    expanded = list(expanded)
    if event_id in expanded:
        expanded.remove(event_id)
        return expanded, False
    expanded.append(event_id)
    return expanded, True


def render_stats(store, regions, now=None, placeholder=REGISTRATIONS_PLACEHOLDER):
    present = STATS_REGIONS & set(regions)
    if not present:
        return {}
    events = store.load_events()
    try:
        registrations = store.load_registrations(fallback=False)
    except StorageReadError as e:
        logger.error('Error reading registrations for stats: %s', e)
        registrations = None
    stats = compute_stats(events, registrations, now=now, placeholder=placeholder)
    values = {
        TOTAL_EVENTS: stats['total_events'],
        TOTAL_STUDENTS: stats['total_registrations'],
        UPCOMING_EVENTS: stats['upcoming_events'],
    }
    return {region: str(value) for region, value in values.items() if region in present}


def render_events(store, regions, expanded=(), now=None, placeholder=REGISTRATIONS_PLACEHOLDER):
    regions = set(regions)
    events = store.load_events()
    context = {'admin_events': None, 'public_events': None, 'details': {}}

    if ADMIN_LIST in regions:
        context['admin_events'] = events
        known = {e.id for e in events}
        # Every visible detail region is rebuilt from storage on render.
        context['details'] = {
            event_id: registrations_detail(store, event_id)
            for event_id in expanded if event_id in known
        }

    if PUBLIC_LIST in regions:
        context['public_events'] = events

    context['stats'] = render_stats(store, regions, now=now, placeholder=placeholder)
    return context


def build_page(store, regions, expanded=(), now=None, placeholder=REGISTRATIONS_PLACEHOLDER):
    """Initial render: event lists when the page has any event region, stats alone otherwise."""
    if EVENT_REGIONS & set(regions):
        context = render_events(store, regions, expanded, now=now, placeholder=placeholder)
    else:
        context = {
            'admin_events': None,
            'public_events': None,
            'details': {},
            'stats': render_stats(store, regions, now=now, placeholder=placeholder),
        }
    context['regions'] = frozenset(regions)
    return context
