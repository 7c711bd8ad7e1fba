"""Services Layer — orchestration of registry, ledger, and ranking.

Invariants:
    - Services own transactions; repositories never commit
    - Permission and ranking rules are delegated to core/
"""
