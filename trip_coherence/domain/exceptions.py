"""Domain semantic exceptions."""


class DomainError(Exception):
    """Base domain exception."""


class InvalidTripError(DomainError):
    """Raised when a payload cannot be read as a trip."""


class InvalidSettings(DomainError):
    """Raised when coherence settings are out of range."""

    def __init__(self, name: str, value: object):
        self.setting = name
        super().__init__(f"Invalid value for {name}: {value!r}")
