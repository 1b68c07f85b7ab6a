"""acmecancel errors."""
from typing import Any
from typing import Mapping
from typing import Optional


class Error(Exception):
    """Generic acmecancel error."""


class KeyParseError(Error):
    """Account key could not be decoded."""


class ClientError(Error):
    """Network error."""


class TransportError(ClientError):
    """HTTP request failed before a response was received.

    Wraps `requests.exceptions.RequestException` (connection refused,
    DNS failure, timeout); the wrapped exception is kept as
    ``__cause__``.

    """
    def __init__(self, method: str, url: str, error: Exception) -> None:
        super().__init__(method, url, error)
        self.method = method
        self.url = url
        self.error = error

    def __str__(self) -> str:
        return '{0} {1} failed: {2}'.format(self.method, self.url, self.error)


class NonceError(ClientError):
    """Server nonce error."""


class NoNonceError(NonceError):
    """Directory did not respond with a usable nonce.

    Raised on a non-2xx status, or on a missing or empty
    ``Replay-Nonce`` header.

    :ivar int status_code: HTTP status of the directory response
    :ivar headers: Mapping of HTTP headers

    """
    def __init__(self, status_code: int, headers: Mapping, *args: Any) -> None:
        super().__init__(*args)
        self.status_code = status_code
        self.headers = dict(headers)

    def __str__(self) -> str:
        return ('acme server did not respond with a proper nonce header '
                '(HTTP {0})'.format(self.status_code))


class ProtocolError(ClientError):
    """Server rejected the request with an error document.

    ``str()`` of the error is the server-provided ``detail``.

    :ivar str detail: human-readable message from the server
    :ivar str typ: problem type URN, if any
    :ivar str title: problem title, if any
    :ivar int status_code: HTTP status of the response

    """
    def __init__(self, detail: str, typ: Optional[str] = None,
                 title: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.typ = typ
        self.title = title
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


class ResponseParseError(ClientError):
    """Server response body did not have the expected JSON shape."""

    def __init__(self, status_code: int, error: Any) -> None:
        super().__init__(status_code, error)
        self.status_code = status_code
        self.error = error

    def __str__(self) -> str:
        return 'could not parse server response (HTTP {0}): {1}'.format(
            self.status_code, self.error)


class AuthorizationPending(ClientError):
    """Server reported the authorization as still pending."""

    def __init__(self, url: str) -> None:
        super().__init__(url)
        self.url = url

    def __str__(self) -> str:
        return 'authz still pending'
