"""Cache utilities for test isolation."""
from __future__ import annotations


def reset_agentrules_caches() -> None:
    """Reset module-level caches so tests never observe each other's config."""
    from agentrules.core.config.cache import clear_all_caches
    from agentrules.core.config.validation import load_schema
    from agentrules.core.stdlib_logging import reset_stdlib_logging_for_tests

    clear_all_caches()
    load_schema.cache_clear()
    reset_stdlib_logging_for_tests()
