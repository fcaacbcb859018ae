from __future__ import annotations

import secrets


class IdFactory:
    """Hands out ids for a single planning call.

    Each factory draws its own random run token, so two calls never share ids
    even when they run at the same time. Numbering restarts for every factory.
    """

    def __init__(self, prefix: str, token: str | None = None) -> None:
        self.prefix = prefix
        self.token = token or secrets.token_hex(4)
        self._issued = 0

    def next(self) -> str:
        self._issued += 1
        return f"{self.prefix}-{self.token}-{self._issued:02d}"

    @property
    def issued(self) -> int:
        return self._issued
