"""Custom exception hierarchy for immutable data objects."""


class DataObjectsError(Exception):
    """Base exception for all data object errors."""


# --- Configuration ---
class ConfigError(DataObjectsError):
    """Invalid or missing configuration."""


# --- Immutability ---
class ImmutableAttributeError(DataObjectsError, AttributeError):
    """Attempt to assign or delete an attribute of a sealed instance."""

    def __init__(self, owner: str, attribute: str):
        self.owner = owner
        self.attribute = attribute
        super().__init__(
            f"{owner} is immutable; cannot change attribute '{attribute}'"
        )
