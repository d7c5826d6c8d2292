"""Kernel time – Clock port + implementations."""
from mp_facets.kernel.time.clock import Clock, FrozenClock, SystemClock, naive_utc, utc_midnight, utc_now

__all__ = ["Clock", "FrozenClock", "SystemClock", "naive_utc", "utc_midnight", "utc_now"]
