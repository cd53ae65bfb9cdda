"""Port interfaces - Layer boundary contracts.

    StorePort - Key-value preference persistence
"""

from prefwrap.ports.store_port import StorePort

__all__ = [
    "StorePort",
]
