"""
handlers/ - Presentation Layer
================================
FastAPI routers. Each handler parses the request, delegates to the
appropriate Service (or the refresh controller) and serializes the result.
No business logic lives here; errors are mapped in error_handler.py.
"""
