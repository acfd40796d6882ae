"""
CKB chain data models using Pydantic for validation and serialization.

Only the fields that affect transaction size or selection are modelled.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

HEX_PATTERN = re.compile(r"^0x([0-9a-fA-F]{2})*$")


def hex_to_bytes(value: str) -> bytes:
    """
    Decode a 0x-prefixed hex string.

    Raises:
        ValueError: If the string is not 0x-prefixed, even-length hex
    """
    if not HEX_PATTERN.match(value):
        raise ValueError(f"Invalid hex string: {value!r}")
    return bytes.fromhex(value[2:])


def _validate_hex(value: str) -> str:
    hex_to_bytes(value)
    return value.lower()


class HashType(str, Enum):
    DATA = "data"
    TYPE = "type"
    DATA1 = "data1"
    DATA2 = "data2"


class DepType(str, Enum):
    CODE = "code"
    DEP_GROUP = "dep_group"


class Script(BaseModel):
    code_hash: str = Field(..., pattern=r"^0x[0-9a-fA-F]{64}$")
    hash_type: HashType = HashType.TYPE
    args: str = "0x"

    model_config = ConfigDict(frozen=True)

    @field_validator("args")
    @classmethod
    def validate_args(cls, v: str) -> str:
        return _validate_hex(v)

    @property
    def args_size(self) -> int:
        return len(hex_to_bytes(self.args))


class OutPoint(BaseModel):
    tx_hash: str = Field(..., pattern=r"^0x[0-9a-fA-F]{64}$")
    index: int = Field(..., ge=0, le=0xFFFFFFFF)

    model_config = ConfigDict(frozen=True)

    def sort_key(self) -> tuple[str, int]:
        return (self.tx_hash.lower(), self.index)


class CellDep(BaseModel):
    out_point: OutPoint
    dep_type: DepType = DepType.CODE

    model_config = ConfigDict(frozen=True)


class CellOutput(BaseModel):
    """A cell output: capacity in shannons, lock script and optional type script."""

    capacity: int = Field(..., ge=0)
    lock: Script
    type_script: Script | None = Field(default=None, alias="type")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class LiveCell(BaseModel):
    """A spendable cell as returned by the indexer: where it lives and what it holds."""

    out_point: OutPoint
    output: CellOutput
    output_data: str = "0x"

    model_config = ConfigDict(frozen=True)

    @field_validator("output_data")
    @classmethod
    def validate_output_data(cls, v: str) -> str:
        return _validate_hex(v)

    @property
    def capacity(self) -> int:
        return self.output.capacity
