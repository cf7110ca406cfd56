"""Session-scoped cache of resolved token addresses."""

from typing import Optional


class ResolutionCache:
    """Maps (chain key, uppercase symbol) to a resolved address.

    Entries are never evicted. Writes are last-write-wins, which is safe
    because a key always resolves to the same address.
    """

    def __init__(self, initial: Optional[dict[tuple[str, str], str]] = None):
        self._entries: dict[tuple[str, str], str] = {}
        for (chain_key, symbol), address in (initial or {}).items():
            self.set(chain_key, symbol, address)

    @staticmethod
    def _key(chain_key: str, symbol: str) -> tuple[str, str]:
        return chain_key.lower(), symbol.upper()

    def get(self, chain_key: str, symbol: str) -> Optional[str]:
        return self._entries.get(self._key(chain_key, symbol))

    def set(self, chain_key: str, symbol: str, address: str) -> None:
        self._entries[self._key(chain_key, symbol)] = address

    def __contains__(self, key: tuple[str, str]) -> bool:
        return self._key(*key) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
