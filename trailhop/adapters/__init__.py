"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the planner to external systems:
- Catalogue storage (JSON files)
- Transit provider (Skånetrafiken Open API)
- Caching systems (in-memory, null)
"""
