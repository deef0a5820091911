"""
System Logs Component Routes
"""
from flask import Blueprint, jsonify, request

from delivery_dashboard.core import errors
from .service import LEVELS, SystemLogsService

system_logs_bp = Blueprint('system_logs', __name__)

# Initialize service
service = SystemLogsService()


@system_logs_bp.route('/api/logs')
def api_logs():
    """Activity log with ?level= and ?limit= filters"""
    level_filter = request.args.get('level', 'ALL')
    if level_filter.upper() not in LEVELS + ('ALL',):
        return jsonify(errors.failure(f'Unknown log level: {level_filter}', errors.VALIDATION_ERROR)), 400

    limit = request.args.get('limit', 50, type=int)
    return jsonify(service.get_logs(level_filter=level_filter, limit=limit))


@system_logs_bp.route('/api/logs', methods=['DELETE'])
def api_clear_logs():
    return jsonify({'success': True, 'cleared': service.clear_logs()})


def init_system_logs(app):
    """Initialize System Logs component with Flask app"""
    app.register_blueprint(system_logs_bp)
    return service
