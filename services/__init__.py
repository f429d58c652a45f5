"""
services/ - Business Logic Layer
================================
Validation and orchestration for transactions, savings plans and spending
limits, plus chart and export rendering. Services receive repositories
through their constructors and never build SQL themselves.
"""
