import uuid

from flask import (Blueprint, current_app, flash, g, redirect, render_template,
                   request, session, url_for)

from utils import controller, view
from utils.event_state import EventValidationError, find_event
from utils.storage import SqlStorage
from utils.store import EventStore

main_bp = Blueprint('main', __name__)

EXPANDED_KEY = 'expanded_events'


def get_current_store():
    """Store for the visitor's storage area, cached for the request."""
    if 'store' not in g:
        g.store = EventStore(SqlStorage(session['guest_id']))
    return g.store


@main_bp.before_app_request
def ensure_storage_area():
    """Give every visitor a storage area and seed it once."""
    if 'guest_id' in session:
        return
    session['guest_id'] = str(uuid.uuid4())
    current_app.logger.info(f"New storage area {session['guest_id']}")
    get_current_store().ensure_seeded()


def _render_page(template, regions, status=200, form=None):
    context = view.build_page(
        get_current_store(),
        regions,
        expanded=session.get(EXPANDED_KEY, []),
        placeholder=current_app.config['STATS_REGISTRATION_PLACEHOLDER'],
    )
    return render_template(template, form=form or {}, **context), status


@main_bp.route('/')
def index():
    return _render_page('index.html', view.INDEX_PAGE)


@main_bp.route('/admin')
def admin():
    return _render_page('admin.html', view.ADMIN_PAGE)


@main_bp.route('/events')
def events():
    return _render_page('events.html', view.PUBLIC_PAGE)


@main_bp.route('/admin/events', methods=['POST'])
def add_event():
    form = {
        'id': request.form.get('eid', ''),
        'name': request.form.get('ename', ''),
        'category': request.form.get('category', ''),
        'date': request.form.get('date', ''),
    }
    try:
        controller.add_event(get_current_store(), form)
    except EventValidationError as e:
        flash(str(e), 'error')
        # Keep what was typed so the user can correct it.
        return _render_page('admin.html', view.ADMIN_PAGE, status=400, form=form)

    flash(controller.EVENT_ADDED_MESSAGE, 'success')
    return redirect(url_for('main.admin'))


@main_bp.route('/admin/events/<path:event_id>/remove', methods=['POST'])
def remove_event(event_id):
    confirmed = request.form.get('confirm') == 'yes'
    if controller.remove_event(get_current_store(), event_id, confirmed):
        expanded = session.get(EXPANDED_KEY, [])
        if event_id in expanded:
            session[EXPANDED_KEY] = [e for e in expanded if e != event_id]
    return redirect(url_for('main.admin'))


@main_bp.route('/admin/events/<path:event_id>/registrations', methods=['POST'])
def toggle_registrations(event_id):
    if find_event(get_current_store().load_events(), event_id) is None:
        return redirect(url_for('main.admin'))
    expanded, shown = view.toggle_registrations_detail(session.get(EXPANDED_KEY, []), event_id)
    session[EXPANDED_KEY] = expanded
    return redirect(url_for('main.admin', _anchor=view.detail_region_id(event_id) if shown else None))


@main_bp.route('/events/<path:event_id>/register', methods=['POST'])
def register(event_id):
    store = get_current_store()
    event = find_event(store.load_events(), event_id)
    event_name = event.name if event else request.form.get('event_name') or event_id
    try:
        registration = controller.register_event(
            store, event_id, event_name, request.form.get('student_id'))
    except controller.RegistrationCancelled as e:
        flash(str(e), 'info')
        return redirect(url_for('main.events'))

    flash(controller.registration_success_message(
        event_id, event_name, registration.student_id), 'success')
    return redirect(url_for('main.events'))
