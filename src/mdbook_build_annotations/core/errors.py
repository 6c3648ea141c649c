class AnnotationError(Exception):
    """Base class for errors that abort a preprocessor run."""


class ConfigurationError(AnnotationError):
    """The invocation envelope or the preprocessor table is unusable."""
