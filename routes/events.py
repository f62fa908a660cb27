from flask import Blueprint, current_app, jsonify, request

from utils import controller, view
from utils.event_state import EventValidationError, find_event
from .main import get_current_store

events_bp = Blueprint('events', __name__)


def json_body():
    """Request JSON as a dict; any other payload counts as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@events_bp.route('/', methods=['GET'])
def get_events():
    """List all events."""
    events = get_current_store().load_events()
    return jsonify({
        'events': [event.to_dict() for event in events],
        'count': len(events)
    })


@events_bp.route('/', methods=['POST'])
def add_event():
    """Add an event."""
    data = json_body()
    try:
        event = controller.add_event(get_current_store(), data)
    except EventValidationError as e:
        return jsonify({'error': str(e)}), 400

    return jsonify({
        'success': True,
        'message': controller.EVENT_ADDED_MESSAGE,
        'event': event.to_dict()
    }), 201


@events_bp.route('/<path:event_id>', methods=['DELETE'])
def remove_event(event_id):
    """Remove an event. The request must carry an explicit confirmation."""
    data = json_body()
    if not controller.remove_event(get_current_store(), event_id, data.get('confirm') is True):
        return jsonify({
            'error': 'Confirmation required',
            'confirm': controller.REMOVE_CONFIRMATION_MESSAGE
        }), 400

    return jsonify({'success': True})


@events_bp.route('/<path:event_id>/registrations', methods=['GET'])
def get_event_registrations(event_id):
    """Registrations recorded for an event, newest last."""
    detail = view.registrations_detail(get_current_store(), event_id)
    return jsonify({
        'event_id': event_id,
        'registrations': detail['items'],
        'count': len(detail['items']),
        'message': detail['message']
    })


@events_bp.route('/<path:event_id>/register', methods=['POST'])
def register(event_id):
    """Register a student for an event."""
    data = json_body()
    store = get_current_store()
    event = find_event(store.load_events(), event_id)
    event_name = event.name if event else data.get('event_name') or event_id

    try:
        registration = controller.register_event(store, event_id, event_name, data.get('student_id'))
    except controller.RegistrationCancelled as e:
        return jsonify({'error': str(e)}), 400

    return jsonify({
        'success': True,
        'message': controller.registration_success_message(
            event_id, event_name, registration.student_id),
        'registration': registration.to_dict()
    }), 201


@events_bp.route('/stats', methods=['GET'])
def get_stats():
    """Event, registration and upcoming counts."""
    stats = view.render_stats(
        get_current_store(),
        view.STATS_REGIONS,
        placeholder=current_app.config['STATS_REGISTRATION_PLACEHOLDER'],
    )
    return jsonify({
        'total_events': int(stats[view.TOTAL_EVENTS]),
        'total_registrations': int(stats[view.TOTAL_STUDENTS]),
        'upcoming_events': int(stats[view.UPCOMING_EVENTS])
    })
