"""
Kernel layer.

`kernels/python/` holds the integer-only arithmetic the rebalancer is built
on: checked uint math and the rebalance/invariant kernel. Everything above
this layer (generator, verifier) is a thin, typed wrapper around it.
"""
