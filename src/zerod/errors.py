"""Exceptions raised by zerod."""


class ZerodError(Exception):
    pass


class ConfigurationError(ZerodError):
    """
    Raised when a reactor is assembled with incompatible parts, e.g. a
    property evaluator whose type is not supported by the reactor model,
    or when an input configuration is malformed.
    """


class StateError(ZerodError):
    """
    Raised when the reactor state is queried before the reactor holds a
    property evaluator, or when a network is integrated without reactors.
    """
