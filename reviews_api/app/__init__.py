"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules.  The JSON backed review store and its configuration live
in ``core``, the pagination and analytics logic lives in ``services``
and the HTTP routes are grouped under ``api/<version>/``.
"""

from .main import app, create_app  # noqa: F401
