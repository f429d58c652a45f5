"""
sync/ - Refresh Layer
=====================
Async orchestration on top of the blocking services: concurrent fetches,
fire-and-refresh mutations and debounced search.
"""
