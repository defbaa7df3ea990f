"""Result envelope for a single Harvest API call."""

from collections.abc import Mapping
from typing import Any, Optional

from harvest_reports.core.exceptions import UnknownPropertyError

_MISSING = object()


class Result:
    """Outcome of one remote call: status code, payload and response headers.

    The three reserved properties are ``status_code``, ``payload`` and
    ``metadata``. Any other name is looked up in ``metadata`` when read and
    rejected when written.

    Example:
        >>> result = api.list_clients()
        >>> if result.is_success():
        ...     clients = result.payload
    """

    RESERVED = ("status_code", "payload", "metadata")

    __slots__ = ("_status_code", "_payload", "_metadata")

    def __init__(
        self,
        status_code: Any = None,
        payload: Any = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ):
        """Initialize result.

        Args:
            status_code: HTTP status code, as text or integer
            payload: Parsed response data
            metadata: Response headers
        """
        object.__setattr__(self, "_status_code", status_code)
        object.__setattr__(self, "_payload", payload)
        object.__setattr__(self, "_metadata", metadata)

    @property
    def status_code(self) -> Any:
        return self._status_code

    @status_code.setter
    def status_code(self, value: Any) -> None:
        object.__setattr__(self, "_status_code", value)

    @property
    def payload(self) -> Any:
        return self._payload

    @payload.setter
    def payload(self, value: Any) -> None:
        object.__setattr__(self, "_payload", value)

    @property
    def metadata(self) -> Optional[Mapping[str, Any]]:
        return self._metadata

    @metadata.setter
    def metadata(self, value: Optional[Mapping[str, Any]]) -> None:
        object.__setattr__(self, "_metadata", value)

    def is_success(self) -> bool:
        """Check if the call succeeded (status code starts with ``2``)."""
        if self._status_code is None:
            return False
        return str(self._status_code)[:1] == "2"

    def has_header(self, key: str) -> bool:
        """Check if a response header is present, even with an empty value."""
        return self._metadata is not None and key in self._metadata

    def header(self, key: str, default: Any = None) -> Any:
        """Get a response header.

        Args:
            key: Header name
            default: Value returned when the header is absent

        Returns:
            Header value (possibly empty) or default
        """
        if not self.has_header(key):
            return default
        return self._metadata[key]  # type: ignore[index]

    def get(self, name: str) -> Any:
        """Return a reserved property or a response header.

        Args:
            name: Property name

        Returns:
            Property value

        Raises:
            UnknownPropertyError: If name is neither reserved nor a header
        """
        if name in self.RESERVED:
            return object.__getattribute__(self, f"_{name}")
        value = self.header(name, _MISSING)
        if value is _MISSING:
            raise UnknownPropertyError(type(self).__name__, name)
        return value

    def set(self, name: str, value: Any) -> None:
        """Set a reserved property.

        Args:
            name: Property name
            value: New value

        Raises:
            UnknownPropertyError: If name is not reserved
        """
        if name not in self.RESERVED:
            raise UnknownPropertyError(type(self).__name__, name)
        object.__setattr__(self, f"_{name}", value)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        # Slots are restored directly by copy and pickle
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        self.set(name, value)

    def __repr__(self) -> str:
        return f"Result(status_code={self._status_code!r}, payload={self._payload!r})"
