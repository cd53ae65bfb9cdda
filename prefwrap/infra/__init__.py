"""Infrastructure layer package.

Implements StorePort with concrete stores (in-memory, JSON file, Redis).
TypedPreference depends on StorePort only; stores are instantiated by
prefwrap.config.build_store.
"""
