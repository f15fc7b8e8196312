"""Infrastructure Layer — database sessions, repositories, Anthropic client, logging.

Invariants:
    - Implements the Protocols in core/repository_protocols.py
    - All driver/SDK exceptions mapped to core/errors.py types at this boundary
"""
