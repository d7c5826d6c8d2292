"""Kernel security – the principal a search runs on behalf of."""
from mp_facets.kernel.security.principal import ANONYMOUS, Principal

__all__ = ["ANONYMOUS", "Principal"]
