"""
ERC-4337 preVerificationGas estimation, including the L1 data fee on
Optimism and Arbitrum rollups.
"""

__version__ = "0.1.0"
