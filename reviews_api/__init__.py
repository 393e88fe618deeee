"""
Top‑level package for the Reviews Backend API.

This file makes ``reviews_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``reviews_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
