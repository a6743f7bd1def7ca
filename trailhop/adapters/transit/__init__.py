"""Transit adapters - Implementations of TransitProviderPort.

Available implementations:
- SkanetrafikenTransitAdapter: Skånetrafiken Open API (XML over HTTP)
"""

from .skanetrafiken_adapter import SkanetrafikenTransitAdapter

__all__ = ["SkanetrafikenTransitAdapter"]
