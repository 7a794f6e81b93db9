"""Exceptions raised while reading particle streams

All exceptions derive from :class:`ParticleStreamError`, so callers that
do not care about the kind of failure can catch that one.

* Configuration errors are detected before any file is opened.
* Format errors are raised while reading and abort the read.
* Usage errors indicate the API was used in the wrong order.

"""


class ParticleStreamError(Exception):
    """Base exception for this package."""
    pass


class ConfigurationError(ParticleStreamError):
    """Raised when the requested reader or analysis setup is invalid."""
    pass


class UnknownQuantityError(ConfigurationError, KeyError):
    """Raised when a quantity name is not in the quantity catalog."""

    def __init__(self, name):
        self.name = name
        super().__init__(name)

    def __str__(self):
        return f"Unknown quantity '{self.name}'"


class UnknownAnalysisError(ConfigurationError, KeyError):
    """Raised when no analysis is registered under a name."""

    def __init__(self, name):
        self.name = name
        super().__init__(name)

    def __str__(self):
        return f"Unknown analysis '{self.name}'"


class MalformedStreamError(ParticleStreamError):
    """Raised when the binary stream does not follow the format.

    :param message: description of the problem.
    :param offset: byte offset in the file where the problem was found.
    :param stage: the part of the stream being read, e.g. 'file header'.

    """

    def __init__(self, message, offset=None, stage=None):
        self.message = message
        self.offset = offset
        self.stage = stage
        super().__init__(message)

    def __str__(self):
        context = []
        if self.stage is not None:
            context.append(self.stage)
        if self.offset is not None:
            context.append(f'offset {self.offset}')
        if context:
            return f"{self.message} ({', '.join(context)})"
        return self.message


class TruncatedStreamError(MalformedStreamError):
    """Raised when the stream ends in the middle of a header or record."""
    pass


class UsageError(ParticleStreamError):
    """Raised when the API is used in the wrong order."""
    pass


class LayoutNotInitializedError(UsageError):
    """Raised when an accessor decodes before the reader set its layout."""

    def __init__(self, message='Layout not initialized'):
        super().__init__(message)


class StreamAlreadyConsumedError(UsageError):
    """Raised when read() is called a second time on a reader."""

    def __init__(self, message='Stream already consumed'):
        super().__init__(message)
