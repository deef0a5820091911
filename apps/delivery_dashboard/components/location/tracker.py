"""
Location tracker
Sends a simulated GPS fix to the backend on a fixed interval while a delivery runs.
"""
import logging
import threading
import time

from delivery_dashboard.config.settings import DashboardConfig
from delivery_dashboard.core.api_client import BackendService
from delivery_dashboard.core.notifier import ChangeNotifier

logger = logging.getLogger(__name__)

UPDATE_PATH = '/delivery/location/update/'


def simulated_position(ms=None):
    """Position and speed derived from the current millisecond clock"""
    if ms is None:
        ms = int(time.time() * 1000)
    offset = (ms % 100) / 10000
    return {
        'latitude': DashboardConfig.DEFAULT_LOCATION['latitude'] + offset,
        'longitude': DashboardConfig.DEFAULT_LOCATION['longitude'] + offset,
        'speed': float(ms % 50),
    }


class LocationTracker(BackendService, ChangeNotifier):
    """Periodic location sender; failures are logged and the timer keeps going"""

    name = 'location_tracking'

    def __init__(self, client=None, interval=None):
        BackendService.__init__(self, client)
        ChangeNotifier.__init__(self)
        self.interval = interval or DashboardConfig.get_polling_interval('location')
        self.current_position = None
        self.order_id = None
        self.updates_sent = 0
        self.last_error = None
        self.thread = None
        self.join_timeout = 2
        self._stop_event = threading.Event()

    @property
    def is_tracking(self):
        return self.thread is not None and self.thread.is_alive() and not self._stop_event.is_set()

    def snapshot(self):
        return {
            'is_tracking': self.is_tracking,
            'order_id': self.order_id,
            'current_position': self.current_position,
            'updates_sent': self.updates_sent,
            'last_error': self.last_error,
            'interval': self.interval
        }

    def start(self, order_id=None):
        """Start tracking; an immediate update is sent before the first wait"""
        with self._lock:
            self.order_id = order_id
            if self.is_tracking:
                return
            # each thread owns its event so a lingering old loop still sees its stop
            self._stop_event = threading.Event()
            self.thread = threading.Thread(target=self._tracking_loop, args=(self._stop_event,), daemon=True)
            self.thread.start()
        logger.info('Location tracking started (order %s, every %ss)', order_id, self.interval)
        self.notify_listeners()

    def stop(self):
        with self._lock:
            self._stop_event.set()
            thread = self.thread
            self.thread = None
            self.order_id = None
        if thread is None:
            return
        if thread is not threading.current_thread():
            thread.join(timeout=self.join_timeout)
        logger.info('Location tracking stopped')
        self.notify_listeners()

    def _tracking_loop(self, stop_event):
        while not stop_event.is_set():
            try:
                self.send_update()
            except Exception as e:
                logger.error('Location tracking error: %s', e)
            stop_event.wait(self.interval)

    def send_update(self, ms=None):
        """Send one simulated fix; returns the backend result"""
        position = simulated_position(ms)
        self.current_position = position

        result = self.client.patch(
            UPDATE_PATH,
            payload={
                'latitude': position['latitude'],
                'longitude': position['longitude'],
                'tracking_type': 'gps',
                'accuracy': DashboardConfig.LOCATION_ACCURACY,
                'speed': position['speed'],
            },
            default_message='Failed to update location',
        )
        if result['success']:
            self.updates_sent += 1
            self.last_error = None
        else:
            self.last_error = result['message']
            logger.warning('Location update failed: %s', result['message'])
        self.notify_listeners()
        return result

    def reset(self):
        self.stop()
        with self._lock:
            self.current_position = None
            self.updates_sent = 0
            self.last_error = None
        super().reset()
