# -*- coding: utf-8 -*-
"""
QR Encoder Exceptions

Invalid arguments are reported with the built-in ValueError. The only
dedicated type is the capacity fault raised when the payload does not fit
in any allowed version.
"""


class DataTooLongError(ValueError):
    """Raised when the segments do not fit in the requested version range."""

    def __init__(self, message: str = "Data too long"):
        super().__init__(message)
