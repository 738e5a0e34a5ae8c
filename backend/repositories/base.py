"""Key-value substrate contract the record store is built on."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class StoreProtocol(Protocol):
    """String-keyed, string-valued blob storage.

    ``get`` returns ``None`` for a key that was never written. Failures of the
    underlying medium are raised to the caller unchanged.
    """

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, blob: str) -> None:
        ...
