"""
FastAPI server: imbibe action endpoints.

GET  /api/imbibe  ordered unsigned instructions + action metadata
POST /api/imbibe  same bundle compiled into an unsigned v0 transaction for `account`
GET  /health      liveness probe

Config via env (SOLANA_RPC_URL). Failures are not caught here: they propagate
to the ASGI runtime, which reports them as 500.
"""

from __future__ import annotations

import base64
from typing import Any, AsyncIterator

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from solana.rpc.async_api import AsyncClient
from solders.pubkey import Pubkey

from imbibe_action import __version__
from imbibe_action.api_server.middleware import request_context_middleware
from imbibe_action.config import get_settings
from imbibe_action.config.env import mask_rpc_url
from imbibe_action.logging import get_logger
from imbibe_action.transactions import (
    build_imbibe_transaction,
    build_unsigned_transaction,
    fetch_latest_blockhash,
)

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Dependency
# -----------------------------------------------------------------------------

async def get_connection() -> AsyncIterator[AsyncClient]:
    """Dependency: fresh RPC connection per request, closed when the request ends."""
    rpc_url = get_settings().solana_rpc_url
    logger.debug("rpc_connection_opened", rpc_url=mask_rpc_url(rpc_url))
    async with AsyncClient(rpc_url) as client:
        yield client


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------

class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AccountKeyModel(_CamelModel):
    pubkey: str | None = Field(..., description="Account (base58); null = slot bound to the signing wallet")
    is_signer: bool = Field(..., alias="isSigner")
    is_writable: bool = Field(..., alias="isWritable")


class InstructionModel(_CamelModel):
    program_id: str = Field(..., alias="programId", description="Program (base58)")
    keys: list[AccountKeyModel]
    data: str = Field(..., description="Instruction data (base64)")


class ButtonSpecModel(BaseModel):
    type: str
    description: str
    default: str


class ActionSpecificationModel(BaseModel):
    button: ButtonSpecModel


class ActionMetadataModel(_CamelModel):
    name: str
    description: str
    specification: ActionSpecificationModel
    recipient: str = Field(..., description="Resolved imbibed.sol owner (base58)")
    amount: str
    priority_fee: str = Field(..., alias="priorityFee")


class ImbibeResponse(BaseModel):
    """GET /api/imbibe response: ordered instructions and metadata."""

    transaction: list[InstructionModel]
    metadata: ActionMetadataModel


class ImbibeTransactionRequest(BaseModel):
    """POST /api/imbibe body: the wallet that will sign and pay."""

    account: str = Field(..., description="Signer wallet (base58)")


class ImbibeTransactionResponse(BaseModel):
    """POST /api/imbibe response: unsigned base64 v0 transaction."""

    transaction: str = Field(..., description="Unsigned VersionedTransaction (base64)")
    message: str


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------

app = FastAPI(
    title="Imbibe Action",
    description="Builds an unsigned 0.1 SOL transfer to imbibed.sol with priority fees.",
    version=__version__,
)
app.middleware("http")(request_context_middleware)


@app.get("/api/imbibe", response_model=ImbibeResponse)
async def get_imbibe(connection: Any = Depends(get_connection)) -> dict[str, Any]:
    """Resolve imbibed.sol and return [compute price, compute limit, transfer] plus metadata."""
    bundle = await build_imbibe_transaction(connection)
    return bundle.to_json_dict()


@app.post("/api/imbibe", response_model=ImbibeTransactionResponse)
async def post_imbibe(
    body: ImbibeTransactionRequest,
    connection: Any = Depends(get_connection),
) -> ImbibeTransactionResponse:
    """Compile the bundle for `account` (sender and fee payer). Returned unsigned."""
    try:
        payer = Pubkey.from_string(body.account.strip())
    except Exception as exc:
        raise HTTPException(status_code=400, detail="Invalid Solana wallet address") from exc

    bundle = await build_imbibe_transaction(connection)
    blockhash = await fetch_latest_blockhash(connection)
    tx = build_unsigned_transaction(bundle, payer, blockhash)
    logger.info("imbibe_transaction_compiled", payer=str(payer))
    return ImbibeTransactionResponse(
        transaction=base64.b64encode(bytes(tx)).decode("ascii"),
        message=bundle.metadata.description,
    )


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe: API is up."""
    return {"status": "ok"}
