"""
db/ - Database Layer
====================
Handles all PostgreSQL connections, schema initialization, and raw SQL operations.
This is the record store: the lowest layer, with no dependencies on other layers
beyond configuration, logging and the shared error types.
"""
