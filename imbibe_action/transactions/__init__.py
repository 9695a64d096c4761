"""
Transaction assembly: compute budget + transfer instructions for the imbibe action.
"""

from imbibe_action.transactions.assembler import (
    ActionMetadata,
    ImbibeAssembler,
    ImbibeBundle,
    ImbibeParameters,
    build_imbibe_transaction,
)
from imbibe_action.transactions.instructions import (
    UNBOUND_SIGNER,
    AccountSlot,
    InstructionDescriptor,
    UnboundSigner,
    bind_signer,
)
from imbibe_action.transactions.message import build_unsigned_transaction, fetch_latest_blockhash

__all__ = [
    "UNBOUND_SIGNER",
    "AccountSlot",
    "ActionMetadata",
    "ImbibeAssembler",
    "ImbibeBundle",
    "ImbibeParameters",
    "InstructionDescriptor",
    "UnboundSigner",
    "bind_signer",
    "build_imbibe_transaction",
    "build_unsigned_transaction",
    "fetch_latest_blockhash",
]
