"""
SNS domain resolver.

Derives the name registry account for a .sol domain, reads it over the
caller's RPC connection and returns the owner. Tokenized domains (registry
owned by the name tokenizer) resolve to the holder of the domain NFT.
No retries, no caching.

Registry account layout (header): 32 parent + 32 owner + 32 class, then record data.
SPL token account layout: 32 mint + 32 owner + 8 amount (u64 LE) + ...
"""

from __future__ import annotations

import hashlib
import struct
from typing import Any

from solders.pubkey import Pubkey

from imbibe_action.core.errors import log_and_reraise
from imbibe_action.core.exceptions import ResolutionFailure
from imbibe_action.logging import get_logger

logger = get_logger(__name__)

NAME_PROGRAM_ID = Pubkey.from_string("namesLPneUpt7WZvRBTBCqmb1pne1MkCcHmZ3vncKWH")
NAME_TOKENIZER_ID = Pubkey.from_string("nftD3vbNkNqfj2Sd3HZwbpw4BxxKWr4AjGb9X38JeZk")
# Parent registry of every second-level .sol domain
SOL_TLD_AUTHORITY = Pubkey.from_string("58PwtjSDuFHuUkYjH9BYnnQKHfwo9reZhC2zMJv9JPkx")
HASH_PREFIX = "SPL Name Service"
SOL_SUFFIX = ".sol"
TOKENIZED_NAME_SEED = b"tokenized_name"

NAME_REGISTRY_OWNER_OFFSET = 32
NAME_REGISTRY_HEADER_LEN = 96
TOKEN_ACCOUNT_OWNER_OFFSET = 32
TOKEN_ACCOUNT_AMOUNT_OFFSET = 64
TOKEN_ACCOUNT_MIN_LEN = TOKEN_ACCOUNT_AMOUNT_OFFSET + 8  # 72
_ZERO_KEY = bytes(32)

# Registry owner while a domain is wrapped as an NFT
TOKENIZER_CENTRAL_STATE, _ = Pubkey.find_program_address([bytes(NAME_TOKENIZER_ID)], NAME_TOKENIZER_ID)


def normalize_domain(domain: str) -> str:
    """Trim whitespace and strip one trailing .sol; 'imbibed.sol' -> 'imbibed'."""
    return domain.strip().removesuffix(SOL_SUFFIX)


def get_hashed_name(name: str) -> bytes:
    """sha256(HASH_PREFIX + name), the first seed of a name account."""
    return hashlib.sha256((HASH_PREFIX + name).encode("utf-8")).digest()


def get_name_account_key(
    hashed_name: bytes,
    name_class: Pubkey | None = None,
    parent_name: Pubkey | None = None,
) -> Pubkey:
    """Derive a name registry PDA. Seeds: [hashed_name, class or zeros, parent or zeros]."""
    seeds = [
        hashed_name,
        bytes(name_class) if name_class is not None else _ZERO_KEY,
        bytes(parent_name) if parent_name is not None else _ZERO_KEY,
    ]
    key, _ = Pubkey.find_program_address(seeds, NAME_PROGRAM_ID)
    return key


def get_domain_key(domain: str) -> Pubkey:
    """Registry account for a second-level .sol domain (suffix optional)."""
    name = normalize_domain(domain)
    return get_name_account_key(get_hashed_name(name), None, SOL_TLD_AUTHORITY)


def get_tokenized_mint(domain_key: Pubkey) -> Pubkey:
    """NFT mint the tokenizer creates for a domain. Seeds: [b'tokenized_name', domain_key]."""
    mint, _ = Pubkey.find_program_address([TOKENIZED_NAME_SEED, bytes(domain_key)], NAME_TOKENIZER_ID)
    return mint


def parse_registry_owner(data: bytes) -> Pubkey | None:
    """Return the owner stored in a registry header, or None when unset or truncated."""
    if len(data) < NAME_REGISTRY_HEADER_LEN:
        return None
    owner_bytes = data[NAME_REGISTRY_OWNER_OFFSET:NAME_REGISTRY_OWNER_OFFSET + 32]
    if owner_bytes == _ZERO_KEY:
        return None
    return Pubkey.from_bytes(owner_bytes)


def parse_token_account_holder(data: bytes) -> Pubkey | None:
    """Owner of an SPL token account holding exactly one token (the domain NFT), else None."""
    if len(data) < TOKEN_ACCOUNT_MIN_LEN:
        return None
    (amount,) = struct.unpack_from("<Q", data, TOKEN_ACCOUNT_AMOUNT_OFFSET)
    if amount != 1:
        return None
    return Pubkey.from_bytes(data[TOKEN_ACCOUNT_OWNER_OFFSET:TOKEN_ACCOUNT_OWNER_OFFSET + 32])


async def _fetch_account_data(connection: Any, pubkey: Pubkey) -> bytes | None:
    """Raw account data, or None when the account does not exist."""
    resp = await connection.get_account_info(pubkey)
    if resp.value is None:
        return None
    return bytes(resp.value.data)


async def lookup_nft_holder(connection: Any, domain_key: Pubkey) -> Pubkey | None:
    """Wallet holding the domain NFT: largest token account of the mint, if it holds the token."""
    mint = get_tokenized_mint(domain_key)
    resp = await connection.get_token_largest_accounts(mint)
    holders = resp.value or []
    if not holders:
        return None
    data = await _fetch_account_data(connection, holders[0].address)
    if data is None:
        return None
    return parse_token_account_holder(data)


async def lookup_owner(connection: Any, name: str) -> Pubkey | None:
    """
    Fetch the registry account for an already-normalized name and return its owner.

    `connection` is a solana.rpc.async_api.AsyncClient (or anything exposing
    async get_account_info / get_token_largest_accounts with `.value` responses).
    """
    domain_key = get_name_account_key(get_hashed_name(name), None, SOL_TLD_AUTHORITY)
    data = await _fetch_account_data(connection, domain_key)
    if data is None:
        return None
    owner = parse_registry_owner(data)
    if owner == TOKENIZER_CENTRAL_STATE:
        logger.debug("sns_domain_tokenized", name=name, mint=str(get_tokenized_mint(domain_key)))
        return await lookup_nft_holder(connection, domain_key)
    return owner


@log_and_reraise("sns_resolution_failed")
async def resolve_sns_domain(connection: Any, domain: str) -> Pubkey:
    """
    Resolve a .sol domain (with or without the suffix) to its owning account.

    Raises:
        ResolutionFailure: malformed or empty name, no registered owner, or the
            RPC/library call failed. Carries the original (unstripped) domain
            and the cause.
    """
    try:
        name = normalize_domain(domain)
        if not name:
            raise ResolutionFailure(domain, "domain must be non-empty")
        owner = await lookup_owner(connection, name)
    except ResolutionFailure:
        raise
    except Exception as exc:
        raise ResolutionFailure(domain, exc) from exc

    if owner is None:
        raise ResolutionFailure(domain, "no owner registered")

    logger.info("sns_domain_resolved", domain=domain, owner=str(owner))
    return owner
