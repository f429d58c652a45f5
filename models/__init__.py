"""
models/ - Domain Layer
======================
Dataclass records (Transaction, SavingsPlan, SpendingLimit) and the pydantic
request bodies the API accepts.
"""
