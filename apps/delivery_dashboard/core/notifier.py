"""
Observable state holder shared by the component providers
"""
import logging
import threading

logger = logging.getLogger(__name__)


class ChangeNotifier:
    """Base class for providers: guarded state plus change listeners

    Subclasses set `name` and implement snapshot(); listeners are called with
    (name, snapshot) after every change.
    """

    name = 'provider'

    def __init__(self):
        self._lock = threading.RLock()
        self._listeners = []
        self.is_loading = False
        self.error = None
        self.error_code = None

    def add_listener(self, listener):
        if listener not in self._listeners:
            self._listeners.append(listener)

    def snapshot(self):
        return {'is_loading': self.is_loading, 'error': self.error}

    def notify_listeners(self):
        state = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(self.name, state)
            except Exception:
                logger.exception('Listener failed for %s', self.name)

    def _set_loading(self, loading):
        self.is_loading = loading
        self.notify_listeners()

    def _set_error(self, error):
        self.error = error
        self.notify_listeners()

    def reset(self):
        """Forget all state; subclasses clear their own fields first"""
        with self._lock:
            self.is_loading = False
            self.error = None
            self.error_code = None
        self.notify_listeners()

    def _fail(self, result, default_message):
        """Record a failed service result; always returns False"""
        self.error = result.get('message') or default_message
        self.error_code = result.get('error_code')
        return False

    def failure_result(self):
        """The last failure as a service-style result dict"""
        return {
            'success': False,
            'message': self.error,
            'error_code': self.error_code or 'REQUEST_FAILED',
        }
