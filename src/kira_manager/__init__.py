"""
Kira validator node manager.

Joins a node to an existing network with a cross-verified genesis and drives
the validator through its lifecycle by submitting transactions to the
consensus daemon and confirming their effect on chain.
"""
