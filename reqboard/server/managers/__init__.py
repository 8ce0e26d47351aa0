"""Access layer for the board service.

Each module provides functions that encapsulate CRUD operations and the
ordering rules for one entity.  Managers accept an ``EntityStore`` as their
first parameter and raise domain exceptions (``LookupError``,
``ValueError``), never HTTP exceptions -- that translation is the router's
responsibility.
"""
