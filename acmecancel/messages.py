"""ACME protocol messages."""
from typing import Optional

import josepy as jose

from acmecancel import errors
from acmecancel import fields
from acmecancel.mixins import FoldedNamesMixin

STATUS_PENDING = 'pending'
STATUS_VALID = 'valid'
STATUS_DEACTIVATED = 'deactivated'


class Error(FoldedNamesMixin, jose.JSONObjectWithFields):
    """ACME error document.

    https://tools.ietf.org/html/rfc7807

    :ivar str typ:
    :ivar str title:
    :ivar str detail:

    """
    typ: Optional[str] = fields.string('type')
    title: Optional[str] = fields.string('title')
    detail: Optional[str] = fields.string('detail')

    def to_exception(self, status_code: Optional[int] = None) -> errors.ProtocolError:
        """Build the `.ProtocolError` reported for this document."""
        return errors.ProtocolError(self.detail or '', typ=self.typ,
                                    title=self.title, status_code=status_code)


class Authorization(FoldedNamesMixin, jose.JSONObjectWithFields):
    """Authorization resource body, as returned after an update.

    Only ``status`` is decoded; other members are ignored.

    :ivar str status:

    """
    status: Optional[str] = fields.string('status')

    @property
    def pending(self) -> bool:
        """Is the authorization still pending?"""
        return self.status == STATUS_PENDING


class UpdateAuthorization(jose.JSONObjectWithFields):
    """Update authorization."""
    resource_type = 'authz'
    resource: str = fields.fixed('resource', resource_type)
    status: str = jose.field('status', omitempty=True)


def deactivation() -> UpdateAuthorization:
    """Fresh ``{"resource": "authz", "status": "deactivated"}`` payload."""
    return UpdateAuthorization(status=STATUS_DEACTIVATED)
