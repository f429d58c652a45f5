"""
analytics/ - Aggregation Layer
===============================
Pure, synchronous functions that turn the fetched record lists into the
dashboard's derived views: time windows and chart buckets, balance and
spending-limit summaries, savings progress, history filtering and search.
Nothing in this package touches the database or reads the clock.
"""
