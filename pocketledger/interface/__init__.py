"""Mini README: Interactive interfaces for Pocketledger.

Exports the FastAPI application factory that serves the dashboard's JSON API.
"""

from .web_app import create_application

__all__ = ["create_application"]
