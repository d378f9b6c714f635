"""
Test helpers.

- fakes: in-memory contract gateway, ledger and signer
"""
