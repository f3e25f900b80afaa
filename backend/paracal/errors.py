# backend/paracal/errors.py
class AppError(Exception):
    status_code = 400

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class NotFoundError(AppError):
    status_code = 404


class InvalidRangeError(AppError):
    status_code = 400


class ConflictError(AppError):
    status_code = 409


class UnknownReferenceError(AppError):
    status_code = 400
