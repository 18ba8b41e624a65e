import functools
import logging
import re

from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from core.errors import RichDocsError, TokenRefreshError, ValidationError, sink_error_for_status

logger = logging.getLogger(__name__)


def validate_document_id(document_id: str, param_name: str = "document_id") -> str:
    """Validate a Google Docs document ID."""
    if not document_id:
        raise ValidationError(f"{param_name} is required")

    document_id = document_id.strip()
    if not document_id:
        raise ValidationError(f"{param_name} cannot be empty")

    if not re.match(r"^[\w\-]+$", document_id):
        raise ValidationError(f"{param_name} contains invalid characters")

    return document_id


def validate_index_range(start_index: int, end_index: int) -> tuple[int, int]:
    """Validate a half-open [start, end) range in document index space (1-based)."""
    if not isinstance(start_index, int) or isinstance(start_index, bool) or start_index < 1:
        raise ValidationError("start_index must be an integer >= 1")

    if not isinstance(end_index, int) or isinstance(end_index, bool):
        raise ValidationError("end_index must be an integer")

    if end_index <= start_index:
        raise ValidationError(f"end_index ({end_index}) must be greater than start_index ({start_index})")

    return start_index, end_index


def _http_status(error: HttpError) -> int | None:
    resp = getattr(error, "resp", None)
    status = getattr(resp, "status", None)
    try:
        return int(status) if status is not None else None
    except (TypeError, ValueError):
        return None


def handle_http_errors(operation: str):
    """
    A decorator to translate Google API failures into the SinkError family.

    It wraps a call against the document service, catches HttpError, logs a
    detailed error message and raises the most specific SinkError subclass for
    the HTTP status. Token refresh failures surface as TokenRefreshError.
    Errors already belonging to the RichDocsError hierarchy pass through.

    Nothing is retried here: the batch update is all-or-nothing and retry
    policy belongs to the transport.

    Args:
        operation (str): The name of the operation being decorated (e.g., 'create_document').
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except RichDocsError:
                raise
            except HttpError as error:
                status = _http_status(error)
                error_cls = sink_error_for_status(status)

                if status in (401, 403):
                    message = (
                        f"Google Docs rejected {operation} (HTTP {status}): {error}. "
                        "The Google account may need to be reconnected."
                    )
                else:
                    message = f"Google Docs error in {operation}: {error}"

                logger.error(f"API error in {operation}: {error}", exc_info=True)
                raise error_cls(message, status_code=status, operation=operation) from error
            except RefreshError as error:
                logger.error(f"Token refresh failed during {operation}: {error}")
                raise TokenRefreshError(None, str(error)) from error

        return wrapper

    return decorator
