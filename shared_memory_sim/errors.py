"""
Error Types
===========

Structural problems (bad processor counts, undersized output storage,
unknown distributions in strict mode) are rejected before a simulation
starts. Numeric anomalies such as a configuration that never converges are
not errors: they are reported and the result is still recorded.
"""


class InvalidConfigurationError(ValueError):
    """Raised when a simulation cannot be started with the given parameters."""
