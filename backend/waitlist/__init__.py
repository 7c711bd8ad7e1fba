"""Waitlist Application Package — queue membership and ordering service.

Invariants:
    - Package root holds only the version string (no import side-effects)
"""

__version__ = "0.1.0"
