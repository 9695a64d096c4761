"""
Solana Name Service (SNS) lookups: .sol domain -> owning account.
"""

from imbibe_action.sns.resolver import get_domain_key, normalize_domain, resolve_sns_domain

__all__ = ["get_domain_key", "normalize_domain", "resolve_sns_domain"]
