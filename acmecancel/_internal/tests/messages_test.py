"""Tests for acmecancel.messages."""
import json
import sys
import unittest

import josepy as jose
import pytest

from acmecancel import errors


class ErrorTest(unittest.TestCase):
    """Tests for acmecancel.messages.Error."""

    def setUp(self):
        from acmecancel.messages import Error
        self.jobj = {
            'type': 'urn:acme:error:unauthorized',
            'title': 'Unauthorized',
            'detail': 'authz is not pending',
        }
        self.error = Error.from_json(self.jobj)

    def test_fields(self):
        assert self.error.typ == 'urn:acme:error:unauthorized'
        assert self.error.title == 'Unauthorized'
        assert self.error.detail == 'authz is not pending'

    def test_to_exception(self):
        exc = self.error.to_exception(403)
        assert isinstance(exc, errors.ProtocolError)
        assert str(exc) == 'authz is not pending'
        assert exc.typ == 'urn:acme:error:unauthorized'
        assert exc.title == 'Unauthorized'
        assert exc.status_code == 403

    def test_empty(self):
        from acmecancel.messages import Error
        exc = Error.from_json({}).to_exception()
        assert exc.detail == ''
        assert exc.typ is None

    def test_member_name_case(self):
        from acmecancel.messages import Error
        error = Error.from_json({'Type': 'urn:acme:error:malformed', 'DETAIL': 'x'})
        assert error.typ == 'urn:acme:error:malformed'
        assert error.detail == 'x'

    def test_detail_not_a_string(self):
        from acmecancel.messages import Error
        with pytest.raises(jose.DeserializationError):
            Error.from_json({'detail': 42})


class AuthorizationTest(unittest.TestCase):
    """Tests for acmecancel.messages.Authorization."""

    def test_pending(self):
        from acmecancel.messages import Authorization
        assert Authorization.from_json({'status': 'pending'}).pending
        assert not Authorization.from_json({'status': 'deactivated'}).pending
        assert not Authorization.from_json({'status': 'valid'}).pending
        assert not Authorization.from_json({}).pending

    def test_unknown_members_ignored(self):
        from acmecancel.messages import Authorization
        authz = Authorization.from_json({
            'status': 'deactivated',
            'identifier': {'type': 'dns', 'value': 'example.com'},
            'challenges': [],
        })
        assert authz.status == 'deactivated'

    def test_member_name_case(self):
        from acmecancel.messages import Authorization
        assert Authorization.from_json({'Status': 'pending'}).pending
        assert not Authorization.from_json(
            {'Status': 'pending', 'status': 'valid'}).pending

    def test_status_not_a_string(self):
        from acmecancel.messages import Authorization
        with pytest.raises(jose.DeserializationError):
            Authorization.from_json({'status': {'value': 'pending'}})


class UpdateAuthorizationTest(unittest.TestCase):
    """Tests for acmecancel.messages.UpdateAuthorization."""

    def test_deactivation(self):
        from acmecancel.messages import deactivation
        assert json.loads(deactivation().json_dumps()) == {
            'resource': 'authz', 'status': 'deactivated'}

    def test_deactivation_fresh(self):
        from acmecancel.messages import deactivation
        assert deactivation() is not deactivation()
        assert deactivation() == deactivation()

    def test_compact_encoding(self):
        from acmecancel.messages import deactivation
        assert deactivation().json_dumps(separators=(',', ':')) == \
            '{"resource":"authz","status":"deactivated"}'

    def test_from_json_wrong_resource(self):
        from acmecancel.messages import UpdateAuthorization
        with pytest.raises(jose.DeserializationError):
            UpdateAuthorization.from_json({'resource': 'new-authz'})


if __name__ == '__main__':
    sys.exit(pytest.main(sys.argv[1:] + [__file__]))  # pragma: no cover
