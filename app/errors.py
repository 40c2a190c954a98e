# app/errors.py
"""
Typed errors raised by the service layer.
app/main.py maps each class to its HTTP status; services never catch them.
"""


class ParkingError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ParkingError):
    """Referenced site, ticket or contract does not exist."""
    status_code = 404


class ConflictError(ParkingError):
    """Write collides with existing state (foreign-role email, ticket already closed)."""
    status_code = 409


class ValidationFailure(ParkingError):
    """Malformed monetary or time input that slipped past request validation."""
    status_code = 422
