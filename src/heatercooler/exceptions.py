"""Exception classes for heatercooler."""


class HeaterCoolerError(Exception):
    """Base exception for heatercooler."""


class UnknownKeyError(HeaterCoolerError, KeyError):
    """A state field outside the defined set was referenced."""


class UnsupportedWriteError(HeaterCoolerError):
    """A write was attempted on a read-only field."""


class SyncTransportError(HeaterCoolerError):
    """The synchronization request to the appliance failed."""


class ConfigError(HeaterCoolerError):
    """The configuration is invalid."""
