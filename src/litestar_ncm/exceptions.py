"""Exception handling for litestar-ncm."""

from litestar import Request, Response


class NcmError(Exception):
    """Base class for reconciliation errors."""


class ValidationError(NcmError):
    """Required input is missing or malformed."""


class NotFoundError(NcmError):
    """A referenced entity does not exist."""


class OrderNotFoundError(NotFoundError):
    """Order with given ID was not found."""

    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"Order {order_id!r} not found")


class ShipmentNotFoundError(NotFoundError):
    """Shipment with given tracking ID was not found."""

    def __init__(self, tracking_id: str) -> None:
        self.tracking_id = tracking_id
        super().__init__(f"Shipment {tracking_id!r} not found")


class ConflictError(NcmError):
    """The operation would break a uniqueness invariant."""


class UpstreamError(NcmError):
    """The NCM API failed or could not be reached."""


class ConfigurationError(NcmError):
    """A required setting is not configured."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


def _error_response(
    request: Request, detail: str, code: str, status_code: int
) -> Response:
    return Response(
        content={"detail": detail, "code": code},
        status_code=status_code,
    )


def handle_validation_error(
    request: Request, exc: ValidationError
) -> Response:
    """Map ValidationError to 400."""
    return _error_response(request, str(exc), "validation_error", 400)


def handle_not_found(request: Request, exc: NotFoundError) -> Response:
    """Map NotFoundError to 404."""
    return _error_response(request, str(exc), "not_found", 404)


def handle_conflict(request: Request, exc: ConflictError) -> Response:
    """Map ConflictError to 409."""
    return _error_response(request, str(exc), "conflict", 409)


def handle_upstream_error(request: Request, exc: UpstreamError) -> Response:
    """Map UpstreamError to 500."""
    return _error_response(request, str(exc), "upstream_error", 500)


def handle_configuration_error(
    request: Request, exc: ConfigurationError
) -> Response:
    """Map ConfigurationError to 500."""
    return _error_response(request, str(exc), "configuration_error", 500)


def handle_ncm_error(request: Request, exc: NcmError) -> Response:
    """Map any other NcmError to 400."""
    return _error_response(request, str(exc), "ncm_error", 400)


EXCEPTION_HANDLERS = {
    ValidationError: handle_validation_error,
    NotFoundError: handle_not_found,
    ConflictError: handle_conflict,
    UpstreamError: handle_upstream_error,
    ConfigurationError: handle_configuration_error,
    NcmError: handle_ncm_error,
}
