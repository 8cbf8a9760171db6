"""
API package - HTTP surface of the service.
"""

from api.app import create_app

__all__ = ['create_app']
