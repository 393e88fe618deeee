"""
Service layer abstraction.

Services translate request parameters into store calls and assemble
response envelopes.  The store is injected into each service instance
so the data source can be swapped without changing API handlers.
"""
