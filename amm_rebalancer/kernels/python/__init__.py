"""
Production Python kernels.

These are small, auditable, integer-only implementations; they raise on any
out-of-domain input instead of wrapping or clamping.
"""
