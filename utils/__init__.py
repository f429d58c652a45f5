"""
utils/ - Shared Helpers
=======================
Logging, the injectable clock, money formatting and the error taxonomy.
"""
