"""
Module-Selection Distributions
==============================

Processors pick the next memory module to request from one of two
distributions:

- UNIFORM: every module is equally likely.
- NORMAL:  a normal distribution around a per-processor mean module,
           wrapped around the module range (see RandomSource).

Selectors are permissive by default: 'uniform' or 'u' selects UNIFORM,
'normal' or 'n' selects NORMAL, and any other selector falls back to NORMAL
with a warning. Strict mode rejects unknown selectors instead.
"""

from enum import Enum
from typing import Union


class DistributionKind(Enum):
    """Closed set of module-selection distributions."""

    UNIFORM = "uniform"
    NORMAL = "normal"

    @classmethod
    def from_selector(
        cls,
        selector: Union["DistributionKind", str],
        strict: bool = False
    ) -> "DistributionKind":
        """
        Resolve a user-supplied selector to a DistributionKind.

        Accepted selectors (case-insensitive): "uniform", "u", "normal", "n",
        or a DistributionKind instance.

        Args:
            selector: The distribution selector.
            strict: If True, unknown selectors raise instead of falling
                back to the normal distribution.

        Returns:
            DistributionKind: The resolved distribution.

        Raises:
            ValueError: If strict is True and the selector is unknown.
        """
        if isinstance(selector, DistributionKind):
            return selector

        normalized: str = str(selector).strip().lower()
        if normalized in ("uniform", "u"):
            return cls.UNIFORM
        if normalized in ("normal", "n"):
            return cls.NORMAL

        if strict:
            raise ValueError(
                f"Unknown distribution selector {selector!r}. "
                f"Expected one of: uniform, u, normal, n."
            )

        print(
            f"WARNING: Unknown distribution selector {selector!r}, "
            f"falling back to the normal distribution."
        )
        return cls.NORMAL

    @property
    def short_code(self) -> str:
        """Single-character code used in labels and CSV headers."""
        return self.value[0]
