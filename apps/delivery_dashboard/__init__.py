"""
Delivery Manager Dashboard
Flask client for the bookstore delivery backend
"""
__version__ = '1.0.0'
