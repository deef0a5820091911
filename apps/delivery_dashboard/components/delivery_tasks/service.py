"""
Delivery Tasks Service
Task list, per-task workflow, ETA, notes and customer-contact activity logging
"""
import logging
from datetime import datetime

from delivery_dashboard.components import register_component
from delivery_dashboard.config.settings import DashboardConfig
from delivery_dashboard.core import errors
from delivery_dashboard.core.api_client import BackendService, extract_list
from delivery_dashboard.core.models import DeliveryTask

logger = logging.getLogger(__name__)

UPDATE_FAILED = 'UPDATE_FAILED'
FETCH_FAILED = 'FETCH_FAILED'

NOTE_ACTIONS = ('add', 'edit', 'delete')
DASHBOARD_NOTE = 'Status updated via dashboard'


def format_eta(eta):
    """ETA payload in the backend's DD/MM/YYYY + HH:MM form"""
    return {'date': eta.strftime('%d/%m/%Y'), 'time': eta.strftime('%H:%M')}


@register_component('delivery_tasks')
class DeliveryTasksService(BackendService):
    """Service for delivery tasks and their activity log"""

    def _call(self, method, path, action, payload=None, success_statuses=(200,),
              invalid_message='Invalid request data', forbidden_message=None, not_found_message=None):
        """Call with per-status messages for 400, 403 and 404"""
        result = self.client.call(
            method, path,
            payload=payload,
            success_statuses=success_statuses,
            error_code=UPDATE_FAILED,
        )
        if result['success']:
            return result

        status_code = result.get('status_code')
        body = result.get('data') if isinstance(result.get('data'), dict) else {}
        if status_code == 400:
            result['message'] = body.get('error') or invalid_message
            result['error_code'] = errors.VALIDATION_ERROR
        elif status_code == 403 and forbidden_message:
            result['message'] = forbidden_message
        elif status_code == 404 and not_found_message:
            result['message'] = not_found_message
            result['error_code'] = errors.NOT_FOUND
        elif result['error_code'] == UPDATE_FAILED:
            result['message'] = f'Failed to {action}: {status_code}'
        return result

    @staticmethod
    def _acknowledged(result, action):
        """200 responses count only when the body reports success or a message"""
        body = result.get('data') if isinstance(result.get('data'), dict) else {}
        if body.get('success') is True or body.get('message') is not None:
            return {'success': True, 'message': body.get('message') or f'{action} succeeded', 'data': body}
        return errors.failure(f'Failed to {action}', UPDATE_FAILED)

    def get_all_tasks(self):
        """Assigned requests merged with converted assignments

        Either source may fail on its own; the call fails only when both yield nothing.
        """
        if not self.client.has_token():
            return errors.no_token()

        tasks = []

        requests_result = self.client.get('/delivery/managers/assigned-requests/', error_code=FETCH_FAILED)
        if requests_result['success']:
            records = extract_list(requests_result['data'])
            tasks.extend(DeliveryTask.from_json(item) for item in records if isinstance(item, dict))
            logger.debug('Parsed %d assigned requests', len(records))
        else:
            logger.warning('Assigned requests unavailable: %s', requests_result['message'])

        assignments_result = self.client.get('/delivery/assignments/my-assignments/', error_code=FETCH_FAILED)
        if assignments_result['success']:
            for item in extract_list(assignments_result['data']):
                if not isinstance(item, dict):
                    continue
                task = DeliveryTask.from_assignment(item)
                if task is None:
                    logger.debug('Skipping assignment %s without order data', item.get('id'))
                    continue
                tasks.append(task)
        else:
            logger.warning('Assignments unavailable: %s', assignments_result['message'])

        if not tasks:
            return errors.failure('Failed to load any tasks', FETCH_FAILED)
        return {'success': True, 'data': tasks}

    def get_task(self, task_id):
        result = self.client.get(f'/delivery/tasks/{task_id}/', error_code=FETCH_FAILED,
                                 default_message='Failed to fetch delivery task')
        if not result['success']:
            if result.get('status_code') == 404:
                result['error_code'] = errors.NOT_FOUND
            return result
        body = result['data'] if isinstance(result['data'], dict) else {}
        if body.get('success') is True and isinstance(body.get('task'), dict):
            return {'success': True, 'data': DeliveryTask.from_json(body['task'])}
        return errors.failure(body.get('message') or 'Failed to fetch delivery task', FETCH_FAILED)

    def update_task_status(self, task_id, status):
        result = self._call(
            'PATCH', f'/delivery/assignments/{task_id}/update-status/',
            'update task status',
            payload={'status': status, 'notes': DASHBOARD_NOTE},
            invalid_message='Invalid status transition',
            forbidden_message='Permission denied: Only assigned delivery manager can update status',
            not_found_message=f'Task not found: {task_id}',
        )
        if not result['success']:
            return result
        return self._acknowledged(result, 'update task status')

    def update_location(self, task_id, latitude, longitude):
        result = self._call(
            'POST', '/delivery/location/',
            'update location',
            payload={
                'task_id': task_id,
                'latitude': latitude,
                'longitude': longitude,
                'timestamp': datetime.now().isoformat(),
            },
            invalid_message='Invalid location data',
            forbidden_message='Permission denied: Only delivery managers can update location',
        )
        if not result['success']:
            return result
        return self._acknowledged(result, 'update location')

    def update_eta(self, task_id, eta):
        result = self._call(
            'PUT', f'/delivery/tasks/{task_id}/eta/',
            'update ETA',
            payload={'eta': format_eta(eta)},
            invalid_message='Invalid ETA data',
            forbidden_message='Permission denied: Only delivery managers can update ETA',
            not_found_message=f'Task not found: {task_id}',
        )
        if not result['success']:
            return result
        return self._acknowledged(result, 'update ETA')

    def update_order_notes(self, order_id, action, notes=None, note_id=None):
        """Add, edit or delete a delivery note on an order"""
        if action not in NOTE_ACTIONS:
            return errors.failure(f'Unknown note action: {action}', errors.VALIDATION_ERROR)
        if action != 'delete' and not (notes or '').strip():
            return errors.failure('Notes content is required', errors.VALIDATION_ERROR)

        payload = {'order_id': int(order_id), 'action': action}
        if action != 'delete':
            payload['notes_content'] = notes
        if note_id is not None:
            payload['note_id'] = note_id

        result = self._call(
            'POST', '/delivery/activities/log/note/',
            f'{action} notes',
            payload=payload,
            invalid_message='Invalid notes data',
            forbidden_message='Permission denied: You cannot add notes to this order',
            not_found_message=f'Order not found: {order_id}',
        )
        if not result['success']:
            return result
        return self._acknowledged(result, f'{action} notes')

    def add_order_notes(self, order_id, notes):
        return self.update_order_notes(order_id, 'add', notes=notes)

    def edit_order_notes(self, order_id, notes, note_id=None):
        return self.update_order_notes(order_id, 'edit', notes=notes, note_id=note_id)

    def delete_order_notes(self, order_id, note_id=None):
        return self.update_order_notes(order_id, 'delete', note_id=note_id)

    def log_contact_customer(self, order_id, contact_method):
        result = self._call(
            'POST', '/delivery/activities/log/contact/',
            'log contact activity',
            payload={'order_id': int(order_id), 'contact_method': contact_method},
            success_statuses=(201,),
            invalid_message='Invalid contact data',
        )
        if not result['success']:
            return result
        return {'success': True, 'message': 'Contact activity logged', 'data': result['data']}

    def start_task_delivery(self, task_id, latitude=None, longitude=None):
        """Start a task's delivery from the courier's position; the server marks the courier busy"""
        if latitude is None or longitude is None:
            latitude = DashboardConfig.DEFAULT_LOCATION['latitude']
            longitude = DashboardConfig.DEFAULT_LOCATION['longitude']

        result = self.client.patch(
            f'/delivery/tasks/{task_id}/start_delivery/',
            payload={
                'latitude': latitude,
                'longitude': longitude,
                'address': 'Starting delivery',
                'is_tracking_active': True,
            },
            error_code=UPDATE_FAILED,
            default_message='Failed to start delivery',
        )
        if not result['success']:
            return result
        return {'success': True, 'message': 'Delivery started successfully', 'data': result['data']}

    def update_delivery_task_status(self, task_id, status, notes=None, proof_of_delivery=None,
                                    failure_reason=None):
        """Task-level workflow on /delivery/tasks/{id}/update-status/"""
        payload = {'status': status}
        if notes:
            payload['notes'] = notes
        if proof_of_delivery:
            payload['proof_of_delivery'] = proof_of_delivery
        if failure_reason:
            payload['failure_reason'] = failure_reason

        result = self.client.post(
            f'/delivery/tasks/{task_id}/update-status/',
            payload=payload,
            error_code=UPDATE_FAILED,
            default_message='Failed to update task status',
        )
        if not result['success']:
            return result
        body = result['data'] if isinstance(result['data'], dict) else {}
        if body.get('success') is not True:
            return errors.failure(body.get('message') or 'Failed to update task status', UPDATE_FAILED)
        return {'success': True, 'message': body.get('message') or f'Task marked {status}', 'data': body}

    def accept_task(self, task_id, notes=None):
        return self.update_delivery_task_status(task_id, DeliveryTask.STATUS_ACCEPTED, notes=notes)

    def mark_picked_up(self, task_id, notes=None):
        return self.update_delivery_task_status(task_id, DeliveryTask.STATUS_PICKED_UP, notes=notes)

    def mark_in_transit(self, task_id, notes=None):
        return self.update_delivery_task_status(task_id, DeliveryTask.STATUS_IN_TRANSIT, notes=notes)

    def mark_delivered(self, task_id, proof_of_delivery=None, notes=None):
        return self.update_delivery_task_status(task_id, DeliveryTask.STATUS_DELIVERED, notes=notes,
                                                proof_of_delivery=proof_of_delivery)

    def mark_completed(self, task_id, notes=None):
        return self.update_delivery_task_status(task_id, DeliveryTask.STATUS_COMPLETED, notes=notes)

    def mark_failed(self, task_id, failure_reason, notes=None):
        return self.update_delivery_task_status(task_id, DeliveryTask.STATUS_FAILED, notes=notes,
                                                failure_reason=failure_reason)

    def get_dashboard_stats(self):
        result = self.client.get('/delivery/dashboard/stats/', error_code=FETCH_FAILED,
                                 default_message='Failed to load statistics')
        if not result['success']:
            return result
        body = result['data'] if isinstance(result['data'], dict) else {}
        return {'success': True, 'data': body.get('statistics') or {}}
