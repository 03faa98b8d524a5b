"""
Domain error taxonomy.

Services raise these before performing any write; the HTTP layer maps each
class to a status code (see ``exception_handlers``). Anything that is not an
``OrderServiceError`` is treated as an unexpected failure.
"""


class OrderServiceError(Exception):
    status_code = 500
    code = "server_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(OrderServiceError):
    status_code = 400
    code = "invalid_request"


class Unauthorized(OrderServiceError):
    status_code = 401
    code = "unauthorized"


class Forbidden(OrderServiceError):
    status_code = 403
    code = "forbidden"


class NotFound(OrderServiceError):
    status_code = 404
    code = "not_found"


class Conflict(OrderServiceError):
    status_code = 409
    code = "conflict"
