"""
API server package: HTTP interface for the imbibe action.

Creates one RPC connection per request and delegates to the transaction
assembler. Errors propagate to the hosting runtime.
"""
