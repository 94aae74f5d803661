class ZooEntropyError(ValueError):
    """Base class for data-quality and argument errors raised by zooentropy."""


class EmptyInputError(ZooEntropyError):
    """Raised when a sequence has zero observations."""


class InsufficientDataError(ZooEntropyError):
    """Raised when a sequence has no valid (non-missing) observations where some are required."""


class InvalidBinCountError(ZooEntropyError):
    """Raised when a requested number of bins is not an integer >= 2."""


class DataDownloadError(ZooEntropyError):
    """Raised when a remote table cannot be fetched."""
