"""Error types shared by the services and routers"""

from __future__ import annotations


class ForgeError(Exception):
    """Base class for all application errors"""

    status_code = 500


class ValidationError(ForgeError):
    """Missing or malformed request fields"""

    status_code = 400


class MaterializationError(ForgeError, OSError):
    """A file write failed part-way through a bundle

    Files listed in ``written`` were committed before the failure and are
    not rolled back.
    """

    status_code = 500

    def __new__(cls, message: str, written: list[str] | None = None):
        # OSError reads two positional args as (errno, strerror)
        return super().__new__(cls, message)

    def __init__(self, message: str, written: list[str] | None = None):
        super().__init__(message)
        self.written = list(written or [])


class UpstreamError(ForgeError):
    """The generation backend could not be reached or answered with an error"""

    status_code = 502
