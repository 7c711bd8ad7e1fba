"""Infrastructure Layer — storage adapters, identity gate, locks, and logging.

Invariants:
    - Infrastructure implements the protocols in core/repository_protocols.py
    - All SQLAlchemy failures leave this layer as WaitlistError subclasses
"""
