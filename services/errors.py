class ServiceError(Exception):
    """A business rule refused the operation.

    ``code`` is the machine-readable error string returned to API clients,
    ``status`` the HTTP status the API layer answers with.
    """

    def __init__(self, code: str, status: int = 400, **details):
        super().__init__(code)
        self.code = code
        self.status = status
        self.details = details


class NotFound(ServiceError):
    def __init__(self, code: str = "not_found", **details):
        super().__init__(code, 404, **details)


class Conflict(ServiceError):
    def __init__(self, code: str, **details):
        super().__init__(code, 409, **details)
