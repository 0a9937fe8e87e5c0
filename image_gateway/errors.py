class GatewayError(Exception):
    """Failure that is reported to the client as an error envelope."""

    status_code = 500
    error = "Request failed"

    def __init__(self, message: str, error: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error


class ClientInputError(GatewayError):
    status_code = 400
    error = "Invalid request"


class NotFoundError(GatewayError):
    status_code = 404
    error = "Image not found"


class UpstreamError(GatewayError):
    status_code = 500
    error = "Storage service failure"
