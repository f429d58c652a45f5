"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for one record kind
(transactions, savings plans, spending limits). Repositories receive raw rows
from the database and return domain model objects; there are no cross-kind joins.
"""
