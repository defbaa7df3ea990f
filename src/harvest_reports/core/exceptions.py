"""Exceptions raised by Harvest Reports."""


class HarvestError(Exception):
    """Base class for all Harvest Reports errors."""


class UnknownPropertyError(HarvestError, AttributeError):
    """Raised when reading or writing a property an object does not declare.

    Attributes:
        owner: Name of the type that was accessed
        name: Requested property name
    """

    def __init__(self, owner: str, name: str):
        self.owner = owner
        self.name = name
        super().__init__(f"Unknown property {owner}.{name}")


class HarvestConnectionError(HarvestError):
    """Raised when the Harvest service cannot be reached."""
