"""
Persisted record shapes for each keyring kind.

These are the plaintext forms written and read by the storage layer;
encryption at rest happens outside this package.
"""

from __future__ import annotations
from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from ..crypto.derivation import DerivationPath
from ..runtime.errors import DecodeError

RecordT = TypeVar("RecordT", bound=BaseModel)


class SimpleKeyringJson(BaseModel):
    """Simple keyring record: hex secret keys in stored order."""
    secret_keys: List[str] = Field(alias="secretKeys")

    model_config = {"populate_by_name": True}


class HdKeyringJson(BaseModel):
    """
    HD keyring record.

    Derived keys are never persisted; they are recomputed from ``seed``,
    ``derivation_path`` and ``account_indices`` on load.
    """
    mnemonic: str
    seed: str
    account_indices: List[int] = Field(alias="accountIndices")
    derivation_path: DerivationPath = Field(alias="derivationPath")
    imported_secret_keys: List[str] = Field(default_factory=list, alias="importedSecretKeys")

    model_config = {"populate_by_name": True}


class DerivationRecord(BaseModel):
    """Routing information for one device-held account."""
    public_key: str = Field(alias="publicKey", min_length=1)
    path: str
    account: int = Field(ge=0)

    model_config = {"populate_by_name": True, "frozen": True}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted camelCase form."""
        return self.model_dump(by_alias=True)


class LedgerKeyringJson(BaseModel):
    """Ledger keyring record."""
    derivation_paths: List[DerivationRecord] = Field(alias="derivationPaths")

    model_config = {"populate_by_name": True}


def parse_record(model: Type[RecordT], data: Any) -> RecordT:
    """
    Validate a persisted record.

    Raises:
        DecodeError: If the record does not have the expected shape
    """
    if isinstance(data, model):
        return data
    if not isinstance(data, dict):
        raise DecodeError(f"{model.__name__} must be an object, got {type(data).__name__}")
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        # Messages only name fields; input values may be secret.
        fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise DecodeError(
            f"Malformed {model.__name__}",
            details={"fields": fields}
        )


__all__ = [
    "SimpleKeyringJson",
    "HdKeyringJson",
    "DerivationRecord",
    "LedgerKeyringJson",
    "parse_record",
]
