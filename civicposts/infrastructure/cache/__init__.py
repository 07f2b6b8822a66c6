from .memory_cache import InMemoryResponseCache, run_periodic_cleanup

__all__ = ["InMemoryResponseCache", "run_periodic_cleanup"]
