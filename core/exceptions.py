"""Custom exception hierarchy."""


class AgencyError(Exception):
    """Base for all agency engine exceptions."""


class InvalidBlocksError(AgencyError):
    """Raised when a template block payload has a malformed shape."""

    def __init__(self, key: str, value_type: str):
        self.key = key
        self.value_type = value_type
        super().__init__(f"Invalid block pool '{key}': expected list, got {value_type}")


class UnknownEnumError(AgencyError):
    """Raised by strict enum helpers when a value is not allowed."""

    def __init__(self, kind: str, value: object, allowed: tuple[str, ...]):
        self.kind = kind
        self.value = value
        self.allowed = allowed
        super().__init__(f"Unknown {kind}: {value!r}. Allowed: {list(allowed)}")


class ConfigurationError(AgencyError):
    pass
