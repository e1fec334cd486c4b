"""
Finance Tracker

Client for a personal finance REST store: records split transactions,
tracks savings goals and derives dashboard summaries.

DESIGN PRINCIPLES:
1. Validate locally, before anything reaches the store
2. The store is the system of record; reload after every write
3. Summaries are recomputed from a snapshot, never patched
4. Store access is swappable (REST or in-memory)
"""

__version__ = "1.0.0"
