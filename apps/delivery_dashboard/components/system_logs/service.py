"""
System Logs Service
Reads the in-memory activity log kept by the core module
"""

LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class SystemLogsService:
    """Service for the activity log view"""

    def get_logs(self, level_filter='ALL', limit=50):
        """Most recent entries, optionally restricted to one level"""
        from delivery_dashboard.core import activity_logs

        logs = list(activity_logs)

        if level_filter and level_filter.upper() != 'ALL':
            level = level_filter.upper()
            logs = [log for log in logs if log.get('level') == level]

        if limit and len(logs) > limit:
            logs = logs[-limit:]

        return logs

    def clear_logs(self):
        from delivery_dashboard.core import activity_logs

        count = len(activity_logs)
        activity_logs.clear()
        return count
