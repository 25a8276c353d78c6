"""Error taxonomy for the update collection pipeline."""


class ReporterError(Exception):
    """Base class for every failure that aborts a reporting run."""

    category = "Error"
    exit_code = 1


class ConfigurationError(ReporterError):
    """The OS release descriptor could not be read."""

    category = "Configuration error"
    exit_code = 2


class UnsupportedPlatformError(ReporterError):
    """The host OS does not map to a known package manager family."""

    category = "Unsupported platform"
    exit_code = 3


class CollectionError(ReporterError):
    """The package manager failed to run or its output could not be parsed."""

    category = "Collection error"
    exit_code = 4


class BuildError(ReporterError):
    """A required report field was missing at assembly time."""

    category = "Build error"
    exit_code = 5
