class APIError(Exception):
    """Base class for errors that are reported to the caller as-is"""
    status_code = 400

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload or {}

    def to_dict(self):
        data = dict(self.payload)
        data['message'] = self.message
        return data


class ValidationError(APIError):
    status_code = 400


class AuthenticationError(APIError):
    status_code = 401


class NotFoundError(APIError):
    status_code = 404


class ConflictError(APIError):
    status_code = 409
