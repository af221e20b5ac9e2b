"""Errors raised while running deployment migrations."""


class MigrationError(Exception):
    """Base class for all migration failures."""


class ConfigurationError(MigrationError):
    """Raised when required settings are missing or malformed."""


class ArtifactNotFoundError(MigrationError):
    """Raised when a contract artifact cannot be located or read."""

    def __init__(self, name: str, reason: str = "no artifact found"):
        super().__init__(f"Artifact '{name}': {reason}")
        self.name = name


class DeploymentError(MigrationError):
    """Raised when a deployment transaction does not succeed."""
