# ==============================================================================
# Infrastructure Adapters
# ==============================================================================
"""
Concrete implementations of the ports defined in analytics_tracker.base.

- storage: SessionStore adapters (memory, cookie jar, Valkey)
- transport: BaseTransport adapters (HTTP)
"""
