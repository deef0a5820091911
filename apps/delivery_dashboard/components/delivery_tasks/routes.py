"""
Delivery Tasks Component Routes
"""
from datetime import datetime

from flask import Blueprint, jsonify, request

from delivery_dashboard.components import registry
from delivery_dashboard.components.delivery_status import status_provider
from delivery_dashboard.components.location import location_tracker
from delivery_dashboard.core import add_log, errors
from delivery_dashboard.core.models import to_json
from .provider import DeliveryTasksProvider
from .service import DeliveryTasksService

delivery_tasks_bp = Blueprint('delivery_tasks', __name__)

# Initialize service and provider
service = DeliveryTasksService()
provider = registry.register_provider(DeliveryTasksProvider(service, location_tracker, status_provider))

# Task-level workflow actions: name -> (service method, required body field)
WORKFLOW_ACTIONS = {
    'accept': ('accept_task', None),
    'pickup': ('mark_picked_up', None),
    'transit': ('mark_in_transit', None),
    'deliver': ('mark_delivered', None),
    'complete': ('mark_completed', None),
    'fail': ('mark_failed', 'failure_reason'),
}


def _respond(result):
    return jsonify(result), errors.http_status_for(result)


def _invalid(message):
    return jsonify(errors.failure(message, errors.VALIDATION_ERROR)), 400


@delivery_tasks_bp.route('/api/tasks')
def api_tasks():
    """Task list with optional ?status= filter and ?q= search"""
    if request.args.get('refresh') or not provider.tasks:
        if not provider.load_tasks():
            return _respond(provider.failure_result())

    tasks = provider.filter_by_status(request.args.get('status'))
    query = request.args.get('q')
    if query:
        matches = {id(task) for task in provider.search(query)}
        tasks = [task for task in tasks if id(task) in matches]

    return jsonify({
        'tasks': [to_json(task) for task in tasks],
        'counts': provider.counts(),
        'error': provider.error
    })


@delivery_tasks_bp.route('/api/tasks/stats')
def api_task_stats():
    return _respond(service.get_dashboard_stats())


@delivery_tasks_bp.route('/api/tasks/<task_id>')
def api_task_detail(task_id):
    task = provider.get_task(task_id)
    if task is not None:
        return jsonify({'success': True, 'data': to_json(task)})
    result = service.get_task(task_id)
    if result['success']:
        result = dict(result, data=to_json(result['data']))
    return _respond(result)


@delivery_tasks_bp.route('/api/tasks/<task_id>/status', methods=['POST'])
def api_task_status(task_id):
    data = request.get_json(silent=True) or {}
    status = data.get('status')
    if not status:
        return _invalid('status is required')

    if provider.update_task_status(task_id, status):
        add_log('INFO', f'Task {task_id} status updated to {status}')
        return jsonify({'success': True, 'data': to_json(provider.get_task(task_id))})
    return _respond(provider.failure_result())


@delivery_tasks_bp.route('/api/tasks/<task_id>/start', methods=['POST'])
def api_task_start(task_id):
    data = request.get_json(silent=True) or {}
    if provider.start_delivery(task_id, data.get('latitude'), data.get('longitude')):
        add_log('INFO', f'Task {task_id}: delivery started')
        return jsonify(dict(provider.snapshot(), success=True))
    return _respond(provider.failure_result())


@delivery_tasks_bp.route('/api/tasks/<task_id>/workflow/<action>', methods=['POST'])
def api_task_workflow(task_id, action):
    if action not in WORKFLOW_ACTIONS:
        return _invalid(f'Unknown workflow action: {action}')

    method_name, required = WORKFLOW_ACTIONS[action]
    data = request.get_json(silent=True) or {}
    kwargs = {'notes': data.get('notes')}
    if action == 'deliver':
        kwargs['proof_of_delivery'] = data.get('proof_of_delivery')
    if required:
        if not data.get(required):
            return _invalid(f'{required} is required')
        kwargs[required] = data[required]

    result = getattr(service, method_name)(task_id, **kwargs)
    if result['success']:
        add_log('INFO', f'Task {task_id}: {action}')
    return _respond(result)


@delivery_tasks_bp.route('/api/tasks/<task_id>/location', methods=['POST'])
def api_task_location(task_id):
    data = request.get_json(silent=True) or {}
    try:
        latitude = float(data['latitude'])
        longitude = float(data['longitude'])
    except (KeyError, TypeError, ValueError):
        return _invalid('latitude and longitude are required')
    return _respond(service.update_location(task_id, latitude, longitude))


@delivery_tasks_bp.route('/api/tasks/<task_id>/eta', methods=['PUT'])
def api_task_eta(task_id):
    """Body: {"eta": ISO-8601 datetime}"""
    data = request.get_json(silent=True) or {}
    try:
        eta = datetime.fromisoformat(data['eta'])
    except (KeyError, TypeError, ValueError):
        return _invalid('eta must be an ISO-8601 datetime')
    return _respond(service.update_eta(task_id, eta))


@delivery_tasks_bp.route('/api/orders/<int:order_id>/notes', methods=['POST'])
def api_order_notes(order_id):
    data = request.get_json(silent=True) or {}
    result = service.update_order_notes(
        order_id,
        data.get('action', 'add'),
        notes=data.get('notes'),
        note_id=data.get('note_id'),
    )
    return _respond(result)


@delivery_tasks_bp.route('/api/orders/<int:order_id>/contact', methods=['POST'])
def api_order_contact(order_id):
    data = request.get_json(silent=True) or {}
    method = data.get('contact_method')
    if not method:
        return _invalid('contact_method is required')
    return _respond(service.log_contact_customer(order_id, method))


def init_delivery_tasks(app):
    """Initialize delivery tasks component with Flask app"""
    app.register_blueprint(delivery_tasks_bp)
    return provider
