"""Core infrastructure: settings, logging, errors, middleware and the review store."""
