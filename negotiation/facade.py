import logging
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from models.errors import FacadeError

logger = logging.getLogger(__name__)


@runtime_checkable
class DataFacade(Protocol):
    """
    Capability for data objects that choose their own public representation.

    ``public_data`` returns the value to serialize in place of the object.
    It signals failure by raising.
    """

    def public_data(self, options: Optional[Dict[str, Any]]) -> Any:
        ...


def resolve_public_data(value: Any, options: Optional[Dict[str, Any]] = None) -> Any:
    """
    Return ``value.public_data(options)`` for a DataFacade, else *value*.

    Only the outer value is inspected; nested facades are left alone.
    """
    if not isinstance(value, DataFacade):
        return value
    try:
        return value.public_data(options)
    except FacadeError as exc:
        logger.warning(
            f"{type(value).__name__}.public_data failed: {exc.message}",
            extra={"error_code": exc.code},
        )
        raise
    except Exception as exc:
        error = FacadeError(f"{type(value).__name__}.public_data failed: {exc}")
        logger.warning(error.message, extra={"error_code": error.code})
        raise error from exc
