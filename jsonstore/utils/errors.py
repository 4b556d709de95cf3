from functools import wraps


class AppError(Exception):
    """Base class for application-specific errors."""
    def __init__(self, code: str, message: str, http_status: int = 400):
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status


class InvalidPayloadError(AppError):
    def __init__(self, message: str = "Invalid JSON format"):
        super().__init__("INVALID_PAYLOAD", message, 400)

class MissingRequiredFieldError(AppError):
    def __init__(self, message: str):
        super().__init__("MISSING_REQUIRED_FIELD", message, 400)

class DuplicateNameError(AppError):
    def __init__(self, message: str, http_status: int = 409):
        super().__init__("DUPLICATE_NAME", message, http_status)

class NotFoundError(AppError):
    def __init__(self, message: str = "File not found"):
        super().__init__("NOT_FOUND", message, 404)

class NotFoundOnDiskError(AppError):
    # index has the record, blob file is gone
    def __init__(self, message: str = "File not found on disk"):
        super().__init__("NOT_FOUND_ON_DISK", message, 404)

class StorageError(AppError):
    def __init__(self, message: str):
        super().__init__("STORAGE_FAILURE", message, 500)

class StorageUnavailableError(AppError):
    def __init__(self, message: str):
        super().__init__("STORAGE_UNAVAILABLE", message, 503)


def storage_errors(action: str):
    """Turn unexpected OSError / undecodable JSON into StorageError."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except (OSError, ValueError) as e:
                raise StorageError(f"Error {action}: {e}") from e
        return wrapper
    return decorator
