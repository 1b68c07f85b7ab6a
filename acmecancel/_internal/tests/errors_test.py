"""Tests for acmecancel.errors."""
import sys
import unittest

import pytest
import requests

from acmecancel import errors


class HierarchyTest(unittest.TestCase):
    """Error classes are caught the way the command line expects."""

    def test_client_errors(self):
        for cls in (errors.TransportError, errors.NonceError, errors.NoNonceError,
                    errors.ProtocolError, errors.ResponseParseError,
                    errors.AuthorizationPending):
            assert issubclass(cls, errors.ClientError)

    def test_key_parse_error_is_not_client_error(self):
        assert issubclass(errors.KeyParseError, errors.Error)
        assert not issubclass(errors.KeyParseError, errors.ClientError)

    def test_no_nonce_is_not_transport_error(self):
        assert not issubclass(errors.NoNonceError, errors.TransportError)


class TransportErrorTest(unittest.TestCase):
    """Tests for acmecancel.errors.TransportError."""

    def test_str(self):
        error = errors.TransportError(
            'GET', 'https://example.com/', requests.exceptions.ConnectionError('refused'))
        assert 'GET https://example.com/ failed: refused' == str(error)


class NoNonceErrorTest(unittest.TestCase):
    """Tests for acmecancel.errors.NoNonceError."""

    def setUp(self):
        self.error = errors.NoNonceError(503, {'Retry-After': '10'})

    def test_str(self):
        assert ('acme server did not respond with a proper nonce header '
                '(HTTP 503)') == str(self.error)

    def test_headers_kept(self):
        assert self.error.headers == {'Retry-After': '10'}
        assert 'Retry-After' not in str(self.error)

    def test_headers_copied(self):
        headers = {'A': 'b'}
        error = errors.NoNonceError(200, headers)
        headers['C'] = 'd'
        assert error.headers == {'A': 'b'}


class ProtocolErrorTest(unittest.TestCase):
    """Tests for acmecancel.errors.ProtocolError."""

    def test_str_is_detail(self):
        error = errors.ProtocolError('malformed request', typ='urn:acme:error:malformed')
        assert 'malformed request' == str(error)

    def test_defaults(self):
        error = errors.ProtocolError('x')
        assert error.typ is None
        assert error.title is None
        assert error.status_code is None


class ResponseParseErrorTest(unittest.TestCase):
    """Tests for acmecancel.errors.ResponseParseError."""

    def test_str(self):
        error = errors.ResponseParseError(500, 'Expecting value')
        assert 'could not parse server response (HTTP 500): Expecting value' == str(error)


class AuthorizationPendingTest(unittest.TestCase):
    """Tests for acmecancel.errors.AuthorizationPending."""

    def test_str(self):
        error = errors.AuthorizationPending('https://example.com/authz/1')
        assert 'authz still pending' == str(error)
        assert error.url == 'https://example.com/authz/1'


if __name__ == '__main__':
    sys.exit(pytest.main(sys.argv[1:] + [__file__]))  # pragma: no cover
