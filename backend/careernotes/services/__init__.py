"""Services Layer — enhancement orchestration and Enhancer implementations.

Invariants:
    - Services own the async IO around the pure core (impureim sandwich)
    - Enhancer failures are recovered here and never reach the note-creation caller
"""
