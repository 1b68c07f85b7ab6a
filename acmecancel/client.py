"""ACME authorization deactivation client."""
import enum
import http.client as http_client
import logging
from typing import Any
from typing import Optional
from typing import Protocol
from typing import Union

import josepy as jose
import requests
from requests.adapters import HTTPAdapter

from acmecancel import __version__
from acmecancel import crypto_util
from acmecancel import errors
from acmecancel import jws
from acmecancel import messages

logger = logging.getLogger(__name__)

DEFAULT_NETWORK_TIMEOUT = 45
NONCE_TIMEOUT = 1
REPLAY_NONCE_HEADER = 'Replay-Nonce'
USER_AGENT = 'acmecancel/{0}'.format(__version__)


class Outcome(enum.Enum):
    """Result of a deactivation attempt that the server accepted."""
    SUCCESS = 'success'
    STILL_PENDING = 'pending'


class NonceSource(Protocol):
    """Anything able to hand out a fresh anti-replay nonce."""

    def fetch_nonce(self) -> str:
        ...  # pragma: no cover


class Directory:
    """ACME directory endpoint, used only as a source of nonces.

    :ivar str url: Directory URL.
    :ivar session: Object with a ``get`` method, defaults to the
        `requests` module.
    :ivar float timeout: Timeout for the nonce request.

    """
    def __init__(self, url: str, session: Any = None,
                 timeout: float = NONCE_TIMEOUT) -> None:
        self.url = url
        self.session = session
        self.timeout = timeout

    def __repr__(self) -> str:
        return '{0}({1!r})'.format(self.__class__.__name__, self.url)

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Directory) and other.url == self.url

    def __hash__(self) -> int:
        return hash(self.url)

    @classmethod
    def select(cls, staging: bool) -> 'Directory':
        """Staging or production Let's Encrypt directory."""
        return STAGING if staging else PRODUCTION

    def fetch_nonce(self) -> str:
        """Get a fresh nonce from the directory.

        :raises .NoNonceError: if the status is not 2xx, or if the
            ``Replay-Nonce`` header is missing or empty.
        :raises .TransportError: in case of any networking problem.

        :returns: ``Replay-Nonce`` header value, unmodified.
        :rtype: str

        """
        session = self.session if self.session is not None else requests
        logger.debug('Requesting fresh nonce from %s', self.url)
        try:
            response = session.get(self.url, timeout=self.timeout,
                                   headers={'User-Agent': USER_AGENT})
        except requests.exceptions.RequestException as error:
            raise errors.TransportError('GET', self.url, error) from error
        try:
            nonce = response.headers.get(REPLAY_NONCE_HEADER)
            if response.status_code // 100 != 2 or not nonce:
                logger.debug('No usable nonce in HTTP %d response, headers: %s',
                             response.status_code, dict(response.headers))
                raise errors.NoNonceError(response.status_code, response.headers)
        finally:
            response.close()
        logger.debug('Received nonce: %s', nonce)
        return nonce


STAGING = Directory('https://acme-staging.api.letsencrypt.org/directory')
PRODUCTION = Directory('https://acme-v01.api.letsencrypt.org/directory')


class ClientNetwork:
    """Wrapper around requests that sends signed POSTs.

    Also adds user agent, and handles Content-Type.

    :param bool verify_ssl: Whether to verify certificates on SSL connections.
    :param str user_agent: String to send as User-Agent header.
    :param int timeout: Timeout for requests.
    """
    JSON_CONTENT_TYPE = 'application/json'
    JOSE_CONTENT_TYPE = 'application/jose+json'
    JSON_ERROR_CONTENT_TYPE = 'application/problem+json'

    def __init__(self, verify_ssl: bool = True, user_agent: str = USER_AGENT,
                 timeout: int = DEFAULT_NETWORK_TIMEOUT) -> None:
        self.verify_ssl = verify_ssl
        self.user_agent = user_agent
        self.session = requests.Session()
        self._default_timeout = timeout
        adapter = HTTPAdapter()

        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __del__(self) -> None:
        # Try to close the session, but don't show exceptions to the
        # user if the call to close() fails.
        try:
            self.session.close()
        except Exception:  # pylint: disable=broad-except
            pass

    def _send_request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """Send HTTP request.

        Makes sure that `verify_ssl` is respected. Logs request and
        response headers. For allowed parameters please see
        `requests.request`.

        :raises .TransportError: in case of any networking problem.

        """
        if method == "POST":
            logger.debug('Sending POST request to %s:\n%s',
                         url, kwargs['data'])
        else:
            logger.debug('Sending %s request to %s.', method, url)
        kwargs['verify'] = self.verify_ssl
        kwargs.setdefault('headers', {})
        kwargs['headers'].setdefault('User-Agent', self.user_agent)
        kwargs.setdefault('timeout', self._default_timeout)
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as error:
            raise errors.TransportError(method, url, error) from error

        logger.debug('Received response:\nHTTP %d\n%s',
                     response.status_code,
                     "\n".join("{0}: {1}".format(k, v)
                               for k, v in response.headers.items()))
        return response

    def post(self, url: str, data: Union[str, bytes],
             content_type: str = JOSE_CONTENT_TYPE, **kwargs: Any) -> requests.Response:
        """POST an already signed body. The response is not checked."""
        kwargs.setdefault('headers', {'Content-Type': content_type})
        return self._send_request('POST', url, data=data, **kwargs)


class AuthzDeactivator:
    """Deactivates pending ACME authorizations.

    :ivar josepy.JWKEC key: Account private key.
    :ivar nonce_source: Provider of fresh nonces, e.g. a `.Directory`.
    :ivar .ClientNetwork net: Client network.
    """
    alg = jose.ES256

    def __init__(self, key_json: Union[str, bytes], nonce_source: NonceSource,
                 net: Optional[ClientNetwork] = None) -> None:
        """Initialize.

        :param key_json: Account key as ``{"D": .., "X": .., "Y": ..}`` JSON.

        :raises .KeyParseError: if the key cannot be decoded.

        """
        self.key = crypto_util.load_account_key(key_json)
        self.nonce_source = nonce_source
        self.net = net if net is not None else ClientNetwork()

    def __enter__(self) -> 'AuthzDeactivator':
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.net.close()

    def _wrap_in_jws(self, obj: jose.JSONDeSerializable, nonce: str, url: str) -> str:
        """Wrap `JSONDeSerializable` object in JWS.

        :param josepy.JSONDeSerializable obj:
        :param str nonce:
        :param str url: The URL to which this object will be POSTed
        :rtype: str

        """
        jobj = obj.json_dumps(separators=(',', ':')).encode()
        logger.debug('JWS payload:\n%s', jobj)
        return jws.JWS.sign(jobj, key=self.key, alg=self.alg,
                            nonce=nonce, url=url).json_dumps(indent=2)

    def deactivate(self, url: str) -> Outcome:
        """Deactivate the authorization at ``url``.

        One nonce fetch, one signed POST, no retries. A rejected nonce
        surfaces as a `.ProtocolError`; call again to start over.

        :raises .NonceError: if no nonce could be obtained.
        :raises .TransportError: in case of any networking problem.
        :raises .ProtocolError: if the server answered with an error document.
        :raises .ResponseParseError: if the response body is not the
            expected JSON.

        :returns: `Outcome.SUCCESS`, or `Outcome.STILL_PENDING` if the server
            still reports the authorization as pending.
        :rtype: `.Outcome`

        """
        body = messages.deactivation()
        nonce = self.nonce_source.fetch_nonce()
        data = self._wrap_in_jws(body, nonce, url)
        response = self.net.post(url, data)
        try:
            return self._check_response(response)
        finally:
            response.close()

    @classmethod
    def _check_response(cls, response: requests.Response) -> Outcome:
        """Classify the server response.

        .. note::
           Checking is not strict: wrong server response ``Content-Type``
           HTTP header is ignored if the body is the expected JSON object.

        """
        response_ct = response.headers.get('Content-Type')
        # Strip parameters from the media-type (rfc2616#section-3.7)
        if response_ct:
            response_ct = response_ct.split(';')[0].strip()
        response.encoding = 'utf-8'
        logger.debug('Received response body:\n%s', response.text)
        try:
            jobj = response.json()
        except (ValueError, RecursionError) as error:
            raise errors.ResponseParseError(response.status_code, error)
        if jobj is None:
            # a JSON null body decodes like an empty object
            jobj = {}
        if not isinstance(jobj, dict):
            raise errors.ResponseParseError(
                response.status_code, 'expected a JSON object')

        if response.status_code >= http_client.BAD_REQUEST:
            if response_ct != ClientNetwork.JSON_ERROR_CONTENT_TYPE:
                logger.debug(
                    'Ignoring wrong Content-Type (%r) for JSON Error', response_ct)
            try:
                error = messages.Error.from_json(jobj)
            except jose.DeserializationError as decode_error:
                raise errors.ResponseParseError(response.status_code, decode_error)
            raise error.to_exception(response.status_code)

        if response_ct != ClientNetwork.JSON_CONTENT_TYPE:
            logger.debug(
                'Ignoring wrong Content-Type (%r) for JSON decodable '
                'response', response_ct)
        try:
            authz = messages.Authorization.from_json(jobj)
        except jose.DeserializationError as decode_error:
            raise errors.ResponseParseError(response.status_code, decode_error)
        if authz.pending:
            logger.debug('Authorization is still pending')
            return Outcome.STILL_PENDING
        logger.debug('Authorization status: %s', authz.status)
        return Outcome.SUCCESS
