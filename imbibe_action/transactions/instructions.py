"""
Instruction descriptors with a deferred fee-payer/sender slot.

The transfer instruction is built before the signing wallet is known, so its
source account is UNBOUND_SIGNER, a distinct type rather than a placeholder
address. bind_signer() turns a descriptor into a solders Instruction once the
signer is supplied.
"""

from __future__ import annotations

import base64
import struct
from dataclasses import dataclass
from typing import Any

from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID

# SystemInstruction::Transfer = 2; layout u32 LE index + u64 LE lamports
SYSTEM_TRANSFER_INDEX = 2


class UnboundSigner:
    """Account slot to be filled by whoever signs the transaction."""

    _instance: "UnboundSigner | None" = None

    def __new__(cls) -> "UnboundSigner":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNBOUND_SIGNER"


UNBOUND_SIGNER = UnboundSigner()


@dataclass(frozen=True)
class AccountSlot:
    pubkey: Pubkey | UnboundSigner
    is_signer: bool
    is_writable: bool

    @property
    def is_bound(self) -> bool:
        return isinstance(self.pubkey, Pubkey)

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "pubkey": str(self.pubkey) if self.is_bound else None,
            "isSigner": self.is_signer,
            "isWritable": self.is_writable,
        }


@dataclass(frozen=True)
class InstructionDescriptor:
    """Unsigned instruction: program, ordered account slots, raw data."""

    program_id: Pubkey
    accounts: tuple[AccountSlot, ...]
    data: bytes

    @classmethod
    def from_instruction(cls, ix: Instruction) -> "InstructionDescriptor":
        """Wrap a fully-bound solders Instruction."""
        return cls(
            program_id=ix.program_id,
            accounts=tuple(
                AccountSlot(meta.pubkey, meta.is_signer, meta.is_writable) for meta in ix.accounts
            ),
            data=bytes(ix.data),
        )

    @property
    def has_unbound_signer(self) -> bool:
        return any(not slot.is_bound for slot in self.accounts)

    def to_json_dict(self) -> dict[str, Any]:
        """JSON shape returned by the API: programId, keys, base64 data."""
        return {
            "programId": str(self.program_id),
            "keys": [slot.to_json_dict() for slot in self.accounts],
            "data": base64.b64encode(self.data).decode("ascii"),
        }


def compute_unit_price_instruction(micro_lamports: int) -> InstructionDescriptor:
    """ComputeBudget SetComputeUnitPrice (priority fee per compute unit)."""
    return InstructionDescriptor.from_instruction(set_compute_unit_price(micro_lamports))


def compute_unit_limit_instruction(units: int) -> InstructionDescriptor:
    """ComputeBudget SetComputeUnitLimit."""
    return InstructionDescriptor.from_instruction(set_compute_unit_limit(units))


def transfer_template(to_pubkey: Pubkey, lamports: int) -> InstructionDescriptor:
    """System transfer whose source is left as UNBOUND_SIGNER."""
    if lamports <= 0:
        raise ValueError(f"lamports must be positive, got {lamports}")
    data = struct.pack("<IQ", SYSTEM_TRANSFER_INDEX, lamports)
    return InstructionDescriptor(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(
            AccountSlot(UNBOUND_SIGNER, is_signer=True, is_writable=True),
            AccountSlot(to_pubkey, is_signer=False, is_writable=True),
        ),
        data=data,
    )


def bind_signer(descriptor: InstructionDescriptor, signer: Pubkey) -> Instruction:
    """Replace every UNBOUND_SIGNER slot with `signer` and return a solders Instruction."""
    accounts = [
        AccountMeta(
            pubkey=slot.pubkey if isinstance(slot.pubkey, Pubkey) else signer,
            is_signer=slot.is_signer,
            is_writable=slot.is_writable,
        )
        for slot in descriptor.accounts
    ]
    return Instruction(program_id=descriptor.program_id, data=descriptor.data, accounts=accounts)
