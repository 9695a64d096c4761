"""
Compile an imbibe bundle into an unsigned v0 transaction for a given wallet.

The signature slots are left as default placeholders; nothing is signed or sent.
"""

from __future__ import annotations

from typing import Any

from solders.hash import Hash
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from imbibe_action.core.errors import log_and_reraise
from imbibe_action.transactions.assembler import ImbibeBundle
from imbibe_action.transactions.instructions import bind_signer


def build_unsigned_transaction(
    bundle: ImbibeBundle,
    payer: Pubkey,
    recent_blockhash: Hash,
) -> VersionedTransaction:
    """Bind `payer` as sender and fee payer, compile a MessageV0, leave signatures empty."""
    instructions = [bind_signer(ix, payer) for ix in bundle.instructions]
    message = MessageV0.try_compile(payer, instructions, [], recent_blockhash)
    signatures = [Signature.default()] * message.header.num_required_signatures
    return VersionedTransaction.populate(message, signatures)


@log_and_reraise("latest_blockhash_failed")
async def fetch_latest_blockhash(connection: Any) -> Hash:
    """Latest blockhash from the RPC (connection: AsyncClient or compatible stub)."""
    resp = await connection.get_latest_blockhash()
    return resp.value.blockhash
