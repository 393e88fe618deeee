"""
Pydantic schema definitions for the data files and API payloads.

The same models validate the JSON source files on load and describe
the response bodies, so the shape clients receive is exactly the shape
the store holds.
"""
