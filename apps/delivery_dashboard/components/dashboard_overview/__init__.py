"""
Dashboard Overview Component
"""
from .routes import dashboard_overview_bp, init_dashboard_overview
from .service import DashboardOverviewService

__all__ = ['dashboard_overview_bp', 'init_dashboard_overview', 'DashboardOverviewService']
