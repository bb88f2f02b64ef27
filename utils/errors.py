"""
utils/errors.py
---------------
Application error types.
Database driver errors are not wrapped; they propagate as-is.
"""


class NotFoundError(Exception):
    """
    Raised when a lookup by primary key matches no row.

    Attributes:
        status: HTTP-style status code for the web layer (always 404).
    """

    status: int = 404

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
