"""Token address resolution."""

from swapdesk.tokens.cache import ResolutionCache
from swapdesk.tokens.resolver import AddressResolver, TokenRef, TokenSource, looks_like_address
from swapdesk.tokens.static import STATIC_TOKENS, get_static_address

__all__ = [
    "AddressResolver",
    "ResolutionCache",
    "STATIC_TOKENS",
    "TokenRef",
    "TokenSource",
    "get_static_address",
    "looks_like_address",
]
