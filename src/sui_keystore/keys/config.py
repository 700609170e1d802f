"""
Keystore backend selection.

A `KeystoreType` names which backend to build and with what parameters;
`init()` turns it into a ready `SuiKeystore`. The dict form matches the
client config files: ``{"File": "/path/to/sui.keystore"}`` or
``{"InMem": 3}``.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..runtime.errors import KeystoreConfigError
from .keystore import FileBasedKeystore, InMemKeystore
from .wallet import SuiKeystore


class KeystoreType(BaseModel, ABC):
    """Base for backend selectors."""

    model_config = {"frozen": True}

    @abstractmethod
    def init(self) -> SuiKeystore:
        """Construct (or load) the backend and wrap it in a facade."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Config-file form of the selector."""

    @classmethod
    def from_dict(cls, data: Any) -> KeystoreType:
        """
        Parse a selector from its config form.

        Accepts ``{"File": path}``, ``{"InMem": n}`` or the tagged model form
        ``{"kind": "File", "path": ...}``.

        Raises:
            KeystoreConfigError: If the data names no known backend
        """
        if isinstance(data, KeystoreType):
            return data
        if not isinstance(data, dict):
            raise KeystoreConfigError(f"Keystore config must be a mapping, got {type(data).__name__}")

        if "kind" not in data:
            if len(data) != 1:
                raise KeystoreConfigError("Keystore config must name exactly one backend",
                                          {"keys": sorted(map(str, data))})
            kind, value = next(iter(data.items()))
            if kind == "File":
                data = {"kind": "File", "path": value}
            elif kind == "InMem":
                data = {"kind": "InMem", "initial_key_number": value}
            else:
                raise KeystoreConfigError(f"Unknown keystore type: {kind}")

        try:
            return _CONFIG_ADAPTER.validate_python(data)
        except ValidationError as e:
            raise KeystoreConfigError(f"Invalid keystore config: {e.error_count()} error(s)",
                                      {"errors": e.errors(include_url=False)}, cause=e) from e


class FileKeystoreConfig(KeystoreType):
    """File-backed keystore at `path`."""

    kind: Literal["File"] = "File"
    path: Path = Field(description="Keystore file location")

    def init(self) -> SuiKeystore:
        return SuiKeystore(FileBasedKeystore.load_or_create(self.path))

    def to_dict(self) -> Dict[str, Any]:
        return {"File": str(self.path)}

    def __str__(self) -> str:
        return f'Keystore Type : File\nKeystore Path : "{self.path}"'


class InMemKeystoreConfig(KeystoreType):
    """In-memory keystore seeded with `initial_key_number` keys."""

    kind: Literal["InMem"] = "InMem"
    initial_key_number: int = Field(default=0, ge=0, description="Keys to create up front")

    def init(self) -> SuiKeystore:
        return SuiKeystore(InMemKeystore(self.initial_key_number))

    def to_dict(self) -> Dict[str, Any]:
        return {"InMem": self.initial_key_number}

    def __str__(self) -> str:
        return "Keystore Type : InMem\n"


KeystoreConfig = Annotated[
    Union[FileKeystoreConfig, InMemKeystoreConfig],
    Field(discriminator="kind"),
]

_CONFIG_ADAPTER = TypeAdapter(KeystoreConfig)


__all__ = [
    "KeystoreType",
    "KeystoreConfig",
    "FileKeystoreConfig",
    "InMemKeystoreConfig",
]
