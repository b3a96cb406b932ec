from __future__ import annotations

from typing import Callable, Protocol

from typing_extensions import Buffer, Self


class HashLike(Protocol):
    """Incremental digest, as implemented by ``hashlib`` objects.

    ``digest()`` does not consume accumulated state, so it may be called
    between ``update()`` calls.
    """

    @property
    def digest_size(self) -> int: ...

    @property
    def name(self) -> str: ...

    def copy(self) -> Self: ...

    def digest(self) -> bytes: ...

    def update(self, data: Buffer, /) -> None: ...


SHAFunc = Callable[[Buffer], HashLike]
