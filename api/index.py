"""
Vercel serverless function wrapper for the FastAPI app.
"""

from imbibe_action.api_server.app import app

__all__ = ["app"]
