"""Identity (address -> handle) providers."""

from .zerion import ZerionIdentityProvider, split_into_chunks

__all__ = ["ZerionIdentityProvider", "split_into_chunks"]
