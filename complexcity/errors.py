"""Structured error hierarchy for complexcity."""


class ComplexcityError(Exception):
    """Base for all complexcity errors."""

    pass


class ValidationError(ComplexcityError):
    """Input validation at boundary failed."""

    pass


class UnknownBuildingKindError(ValidationError):
    """A building kind key did not match any known kind."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown building kind: {key!r}")


class EngineStateError(ComplexcityError):
    """Engine in invalid state for requested operation."""

    pass


class SelectorError(EngineStateError):
    """A second selector was bound to a registry."""

    pass
