class EcoVisionError(Exception):
    """Base class for all errors raised by the estimation engine."""


class InvalidInputError(EcoVisionError, ValueError):
    """
    A numeric input is out of range: negative distance/price/lifespan, or a
    zero where a non-zero divisor is required.
    """

    def __init__(self, name: str, value, reason: str = "must be non-negative"):
        self.name = name
        self.value = value
        super().__init__(f"Invalid {name}={value!r}: {reason}")


class UnknownKeyError(EcoVisionError, LookupError):
    """An enumerated key is not present in a factor table."""

    def __init__(self, kind: str, key, valid=None):
        self.kind = kind
        self.key = key
        self.valid = sorted(valid) if valid is not None else []
        msg = f"Unknown {kind} {key!r}"
        if self.valid:
            msg += f" (expected one of: {', '.join(self.valid)})"
        super().__init__(msg)

    def __str__(self) -> str:
        # LookupError/KeyError would otherwise repr() the message
        return self.args[0]


class UnknownActivityKind(UnknownKeyError):
    """Unknown activity key in an emission factor table."""
