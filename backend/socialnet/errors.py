"""
Domain errors raised by validation and the service layer.
Routers translate them to HTTP status codes; the CLI prints them to stderr.
"""


class SocialNetworkError(Exception):
    status_code = 400


class ValidationError(SocialNetworkError):
    status_code = 400


class NotFoundError(SocialNetworkError):
    status_code = 404


class ConflictError(SocialNetworkError):
    status_code = 409
