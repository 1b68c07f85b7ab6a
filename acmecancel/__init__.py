"""Deactivate pending ACME authorizations.

This package signs a single ``{"resource": "authz", "status": "deactivated"}``
update with a Let's Encrypt account key and posts it to an authorization URL,
using the `ACME protocol`_.

.. _`ACME protocol`: https://ietf-wg-acme.github.io/acme

"""
__version__ = '1.0.0'
