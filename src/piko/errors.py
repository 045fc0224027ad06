""" Base exception for the piko client. Every failure the client raises on
    purpose derives from :class:`PikoError`, which lets the command dispatcher
    contain any failure to the line that caused it.
"""


class PikoError(Exception):
    """Base class for all piko client errors."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
