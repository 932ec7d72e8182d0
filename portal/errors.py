'''
error taxonomy shared by the services

every error is terminal for the current operation, the api layer renders
kind + message, see exception handler in portal/api/main.py
'''


class PortalError(Exception):
    kind = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class ValidationError(PortalError):
    """malformed input, eg unparsable timestamps"""
    kind = "validation"
    status_code = 400


class Forbidden(PortalError):
    kind = "forbidden"
    status_code = 403


class NotFound(PortalError):
    kind = "not_found"
    status_code = 404


class Conflict(PortalError):
    kind = "conflict"
    status_code = 409


class StoreError(PortalError):
    """unclassified persistence failure"""
    kind = "store_error"
    status_code = 500


class StoreTimeout(StoreError):
    kind = "timeout"
    status_code = 504
