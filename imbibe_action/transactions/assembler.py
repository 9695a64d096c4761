"""
Imbibe transaction assembler.

Resolves imbibed.sol, then builds the ordered instruction bundle:

    [SetComputeUnitPrice, SetComputeUnitLimit, SystemTransfer(UNBOUND_SIGNER -> owner)]

Compute budget instructions come first so the runtime applies them before the
transfer executes. The bundle is unsigned; the caller's wallet binds and signs it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from solana.constants import LAMPORTS_PER_SOL
from solders.pubkey import Pubkey

from imbibe_action.core.errors import log_and_reraise
from imbibe_action.logging import get_logger
from imbibe_action.sns.resolver import resolve_sns_domain
from imbibe_action.transactions.instructions import (
    InstructionDescriptor,
    compute_unit_limit_instruction,
    compute_unit_price_instruction,
    transfer_template,
)

logger = get_logger(__name__)

RECIPIENT_DOMAIN = "imbibed.sol"
IMBIBE_AMOUNT_LAMPORTS = LAMPORTS_PER_SOL // 10  # 0.1 SOL
PRIORITY_FEE_MICROLAMPORTS = 20_000
COMPUTE_UNIT_LIMIT = 200_000

ACTION_NAME = "Imbibe"
ACTION_DESCRIPTION = "Send exactly 0.1 SOL to imbibed.sol with priority fees"
BUTTON_LABEL = "imbibe"


@dataclass(frozen=True)
class ImbibeParameters:
    """Fixed parameters of the imbibe action."""

    recipient_domain: str = RECIPIENT_DOMAIN
    amount_lamports: int = IMBIBE_AMOUNT_LAMPORTS
    priority_fee_micro_lamports: int = PRIORITY_FEE_MICROLAMPORTS
    compute_unit_limit: int = COMPUTE_UNIT_LIMIT

    @property
    def amount_label(self) -> str:
        sol = (Decimal(self.amount_lamports) / Decimal(LAMPORTS_PER_SOL)).normalize()
        return f"{sol:f} SOL"

    @property
    def priority_fee_label(self) -> str:
        return f"{self.priority_fee_micro_lamports} microlamports"


@dataclass(frozen=True)
class ActionMetadata:
    """Human-readable description of the action returned next to the instructions."""

    recipient: str
    amount: str
    priority_fee: str
    name: str = ACTION_NAME
    description: str = ACTION_DESCRIPTION
    button_label: str = BUTTON_LABEL

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "specification": {
                "button": {
                    "type": "string",
                    "description": "Button label",
                    "default": self.button_label,
                },
            },
            "recipient": self.recipient,
            "amount": self.amount,
            "priorityFee": self.priority_fee,
        }


@dataclass(frozen=True)
class ImbibeBundle:
    instructions: tuple[InstructionDescriptor, ...]
    metadata: ActionMetadata

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "transaction": [ix.to_json_dict() for ix in self.instructions],
            "metadata": self.metadata.to_json_dict(),
        }


@dataclass
class ImbibeAssembler:
    params: ImbibeParameters = field(default_factory=ImbibeParameters)

    def build_instructions(self, recipient: Pubkey) -> tuple[InstructionDescriptor, ...]:
        return (
            compute_unit_price_instruction(self.params.priority_fee_micro_lamports),
            compute_unit_limit_instruction(self.params.compute_unit_limit),
            transfer_template(recipient, self.params.amount_lamports),
        )

    def build_metadata(self, recipient: Pubkey) -> ActionMetadata:
        return ActionMetadata(
            recipient=str(recipient),
            amount=self.params.amount_label,
            priority_fee=self.params.priority_fee_label,
        )

    @log_and_reraise("imbibe_transaction_failed")
    async def assemble(self, connection: Any) -> ImbibeBundle:
        """Resolve the recipient over `connection` and build the full bundle."""
        recipient = await resolve_sns_domain(connection, self.params.recipient_domain)
        bundle = ImbibeBundle(
            instructions=self.build_instructions(recipient),
            metadata=self.build_metadata(recipient),
        )
        logger.info(
            "imbibe_transaction_built",
            recipient=str(recipient),
            lamports=self.params.amount_lamports,
            priority_fee_micro_lamports=self.params.priority_fee_micro_lamports,
            compute_unit_limit=self.params.compute_unit_limit,
        )
        return bundle


async def build_imbibe_transaction(
    connection: Any,
    params: ImbibeParameters | None = None,
) -> ImbibeBundle:
    """Module-level shortcut: assemble the imbibe bundle with default parameters."""
    return await ImbibeAssembler(params or ImbibeParameters()).assemble(connection)
