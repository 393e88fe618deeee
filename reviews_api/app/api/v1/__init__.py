"""
Version 1 of the API.

This subpackage bundles the review listing and analytics endpoints for
the first public version of the Reviews Backend API.  Breaking changes
should be introduced in new version subpackages (e.g. ``v2``).
"""
