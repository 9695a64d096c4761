"""
Imbibe Action: serverless Solana action that donates a fixed amount of SOL.

Resolves the imbibed.sol SNS domain and assembles an unsigned transfer with
priority-fee instructions for the caller's wallet to sign.
"""

__version__ = "0.1.0"
