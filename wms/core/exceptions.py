"""
Domain Errors - raised by services, turned into JSON responses by the app
"""


class WarehouseError(Exception):
    """Base class for warehouse domain errors"""
    status_code = 400
    kind = "WarehouseError"

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind)
        self.message = message or self.kind


class InsufficientStock(WarehouseError):
    """Outbound/move quantity exceeds the available stock"""
    status_code = 400
    kind = "InsufficientStock"


class SourceNotFound(WarehouseError):
    """Move from a location holding no qualifying row"""
    status_code = 400
    kind = "SourceNotFound"


class NotFound(WarehouseError):
    status_code = 404
    kind = "NotFound"


class Forbidden(WarehouseError):
    status_code = 403
    kind = "Forbidden"


class InvalidInput(WarehouseError):
    status_code = 400
    kind = "InvalidInput"
