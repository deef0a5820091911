"""
Delivery tasks provider
"""
import logging

from delivery_dashboard.core import errors
from delivery_dashboard.core.models import DeliveryTask, to_json
from delivery_dashboard.core.notifier import ChangeNotifier
from .service import DeliveryTasksService

logger = logging.getLogger(__name__)

ASSIGNED_STATUSES = {
    DeliveryTask.STATUS_ASSIGNED,
    DeliveryTask.STATUS_ACCEPTED,
    DeliveryTask.STATUS_IN_PROGRESS,
    DeliveryTask.STATUS_IN_TRANSIT,
    DeliveryTask.STATUS_PICKED_UP,
}
COMPLETED_STATUSES = {DeliveryTask.STATUS_COMPLETED, DeliveryTask.STATUS_DELIVERED}
IN_TRANSIT_STATUSES = {
    DeliveryTask.STATUS_IN_PROGRESS,
    DeliveryTask.STATUS_IN_TRANSIT,
    DeliveryTask.STATUS_PICKED_UP,
}


class DeliveryTasksProvider(ChangeNotifier):
    name = 'delivery_tasks'

    def __init__(self, service=None, tracker=None, status_provider=None):
        super().__init__()
        self.service = service or DeliveryTasksService()
        self.tracker = tracker
        self.status_provider = status_provider
        self.tasks = []

    def _with_status(self, statuses):
        return [task for task in self.tasks if task.status in statuses]

    @property
    def assigned_tasks(self):
        return self._with_status(ASSIGNED_STATUSES)

    @property
    def completed_tasks(self):
        return self._with_status(COMPLETED_STATUSES)

    @property
    def in_transit_tasks(self):
        return self._with_status(IN_TRANSIT_STATUSES)

    @property
    def urgent_tasks(self):
        return self._with_status({DeliveryTask.STATUS_FAILED})

    def counts(self):
        return {
            'total': len(self.tasks),
            'assigned': len(self.assigned_tasks),
            'completed': len(self.completed_tasks),
            'in_transit': len(self.in_transit_tasks),
            'urgent': len(self.urgent_tasks),
        }

    def snapshot(self):
        return {
            'tasks': [to_json(task) for task in self.tasks],
            'counts': self.counts(),
            'is_loading': self.is_loading,
            'error': self.error
        }

    def get_task(self, task_id):
        task_id = str(task_id)
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def filter_by_status(self, status):
        if not status or status == 'all':
            return list(self.tasks)
        return self._with_status({status})

    def search(self, query):
        """Match customer name, task number or delivery address"""
        query = (query or '').strip().lower()
        if not query:
            return list(self.tasks)
        return [
            task for task in self.tasks
            if query in task.customer_name.lower()
            or query in task.task_number.lower()
            or query in task.delivery_address.lower()
        ]

    def load_tasks(self):
        if not self.service.client.has_token():
            self.error_code = errors.NO_TOKEN
            self._set_error(errors.NO_TOKEN_MESSAGE)
            return False

        with self._lock:
            self._set_loading(True)
            self.error = None
            self.error_code = None
            try:
                result = self.service.get_all_tasks()
                if not result['success']:
                    self.tasks = []
                    return self._fail(result, 'Failed to load tasks')
                self.tasks = result['data']
                logger.info('Loaded %d delivery tasks', len(self.tasks))
                return True
            finally:
                self._set_loading(False)

    def update_task_status(self, task_id, status):
        """Server first; the local copy changes only after the server accepts"""
        with self._lock:
            task = self.get_task(task_id)
            if task is None:
                self.error_code = errors.NOT_FOUND
                self._set_error(f'Task not found: {task_id}')
                return False

            self._set_loading(True)
            self.error = None
            self.error_code = None
            try:
                result = self.service.update_task_status(task_id, status)
                if not result['success']:
                    return self._fail(result, 'Failed to update task status')
                task.status = status
                return True
            finally:
                self._set_loading(False)

    def start_delivery(self, task_id, latitude=None, longitude=None):
        """Start a task, then reload tasks, begin tracking and re-read the server status"""
        result = self.service.start_task_delivery(task_id, latitude, longitude)
        if not result['success']:
            with self._lock:
                self._fail(result, 'Failed to start delivery')
            self.notify_listeners()
            return False

        self.load_tasks()
        task = self.get_task(task_id)
        if self.tracker is not None:
            self.tracker.start(order_id=task.order_id if task else None)
        if self.status_provider is not None:
            self.status_provider.refresh_status_from_server()
        return True

    def reset(self):
        with self._lock:
            self.tasks = []
        super().reset()
