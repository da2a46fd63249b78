"""
Interest Profiler: wallet interest profiles for confidential on-chain storage.

Builds an interest profile for a Solana wallet (NFTs, SOL balance, trading
volume, token holdings, DeFi activity), maps it to a tier, and encrypts the
six-field record for an Arcium MXE vault.
"""

__version__ = "0.1.0"
