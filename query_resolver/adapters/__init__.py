"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the resolution core to:
- Entity search (in-memory knowledge base with rapidfuzz ranking)
- Knowledge base storage (CSV files)
- Query building (in-memory resolution state)
- Query planning (plans stored as JSON)
"""
