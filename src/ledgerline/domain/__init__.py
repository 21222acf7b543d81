"""Domain layer for ledgerline.

The computation core lives in ``normalizer``, ``date_filter``, ``ledger`` and
``financials``; the services in ``entity``, ``record``, ``ledger`` and
``financials`` read and write through a ``Database``.
"""
