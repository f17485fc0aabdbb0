from __future__ import annotations


class ContractError(ValueError):
    """A caller broke the contract of a core operation (programming error, not gameplay)."""


class FormatError(ContractError):
    """Malformed position text or figure token."""


class RangeError(ContractError):
    """Dimension, position count or coordinate outside the allowed range."""


class SaveConflict(ContractError):
    """The save target already exists; saves never overwrite."""
