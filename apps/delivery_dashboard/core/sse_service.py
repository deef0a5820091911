"""
Server-Sent Events fan-out for provider state changes
"""
import json
import logging
import queue
import threading
import time

from flask import Response

logger = logging.getLogger(__name__)


class SSEService:
    """Broadcast provider changes to every connected SSE client"""

    def __init__(self, heartbeat_interval=30, max_queue=100):
        self.heartbeat_interval = heartbeat_interval
        self.max_queue = max_queue
        self._subscribers = []
        self._lock = threading.Lock()

    def subscribe(self):
        q = queue.Queue(maxsize=self.max_queue)
        with self._lock:
            self._subscribers.append(q)
        return q

    def unsubscribe(self, q):
        with self._lock:
            if q in self._subscribers:
                self._subscribers.remove(q)

    def subscriber_count(self):
        with self._lock:
            return len(self._subscribers)

    def publish(self, source, state):
        """Provider listener: queue the change for every subscriber"""
        event = {'source': source, 'state': state, 'timestamp': time.time()}
        with self._lock:
            subscribers = list(self._subscribers)
        for q in subscribers:
            try:
                q.put_nowait(event)
            except queue.Full:
                # Slow client; drop its oldest event
                try:
                    q.get_nowait()
                except queue.Empty:
                    pass
                try:
                    q.put_nowait(event)
                except queue.Full:
                    logger.warning('Dropped %s event for a full subscriber queue', source)

    @staticmethod
    def format_event(event):
        return f"data: {json.dumps(event, default=str)}\n\n"

    def generate(self, q):
        try:
            while True:
                try:
                    event = q.get(timeout=self.heartbeat_interval)
                    yield self.format_event(event)
                except queue.Empty:
                    yield ": heartbeat\n\n"
        finally:
            self.unsubscribe(q)

    def stream(self):
        """Flask response streaming provider changes"""
        q = self.subscribe()
        return Response(
            self.generate(q),
            mimetype="text/event-stream",
            headers={
                'Cache-Control': 'no-cache',
                'X-Accel-Buffering': 'no'
            }
        )
