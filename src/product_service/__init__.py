"""Product Service.

A small FastAPI application exposing CRUD operations on products stored in a
relational database. Every JSON response is wrapped in a result envelope.
"""

__version__ = "0.1.0"
