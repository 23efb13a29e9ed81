"""
Alicerce - Municipal procurement bidding and award engine.

Pure decision functions for the demand lifecycle: deadline computation,
blind-bid ranking, split-award resolution and historical price mining.
The engine never talks to storage or the network; callers supply
snapshots and persist the returned decisions.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
