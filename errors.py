"""Error types raised by the portfolio handlers.

Each error carries the HTTP status and the message the client sees. Anything
more detailed (provider responses, OS errors) goes to the log, never into
the response body.
"""


class PortfolioError(Exception):
    """Base error rendered as a ``{"success": false, "message": ...}`` envelope."""

    status_code = 500
    message = 'Server error'

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'success': False, 'message': self.message}


class ConfigError(PortfolioError):
    """Invalid value in the environment at startup."""


class ValidationError(PortfolioError):
    status_code = 400
    message = 'All fields are required'


class NotFoundError(PortfolioError):
    status_code = 404
    message = 'File not found'


class DispatchError(PortfolioError):
    """The mail provider refused or failed to take the message."""

    message = 'Failed to send message. Please try again later.'


class StreamError(PortfolioError):
    message = 'Error downloading resume'
