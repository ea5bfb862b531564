"""
Exceptions raised by ScoreForge Keys.

Range problems in key signatures are never raised: they are clamped and
logged. These exceptions cover document I/O only.
"""


class KeySigError(Exception):
    """Base class for all package errors."""


class XmlReadError(KeySigError):
    """A key-list document could not be parsed."""


class XmlWriteError(KeySigError):
    """The XML writer was driven out of order (e.g. unbalanced etag)."""
