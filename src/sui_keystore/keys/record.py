"""
Key record data model.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..crypto.keypair import SuiKeyPair
from ..enums import SignatureScheme
from ..runtime.address import SuiAddress


@dataclass(frozen=True)
class KeyRecord:
    """
    A keypair together with the address it controls and its scheme.

    Produced by derivation; `address` is always computed from the keypair.
    """
    address: SuiAddress
    keypair: SuiKeyPair
    scheme: SignatureScheme

    @classmethod
    def from_keypair(cls, keypair: SuiKeyPair) -> KeyRecord:
        return cls(keypair.public().to_address(), keypair, keypair.scheme)
