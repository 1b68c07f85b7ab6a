"""Account key utilities.

Let's Encrypt registration keys are handed to this tool as a JSON object
carrying the raw P-256 numbers::

    {"D": <private scalar>, "X": <public x>, "Y": <public y>}

"""
import json
import logging
from typing import Dict
from typing import Union

from cryptography.hazmat.primitives.asymmetric import ec
import josepy as jose

from acmecancel import errors
from acmecancel import fields

logger = logging.getLogger(__name__)

KEY_FIELDS = ('D', 'X', 'Y')


def load_account_key(data: Union[str, bytes]) -> jose.JWKEC:
    """Load a P-256 account key from its JSON encoding.

    :param data: JSON object with integer ``D``, ``X`` and ``Y`` members.

    :raises .KeyParseError: if the JSON is malformed, a member is missing
        or not an integer, or the numbers do not form a valid P-256 key.

    :returns: Private key usable for ``ES256`` signatures.
    :rtype: `josepy.JWKEC`

    """
    try:
        jobj = json.loads(data)
    except (ValueError, RecursionError) as error:
        raise errors.KeyParseError('invalid JSON: {0}'.format(error))
    if not isinstance(jobj, dict):
        raise errors.KeyParseError(
            'expected a JSON object, got {0}'.format(type(jobj).__name__))

    jobj = fields.fold_names(jobj, KEY_FIELDS)
    numbers: Dict[str, int] = {}
    for name in KEY_FIELDS:
        if name not in jobj:
            raise errors.KeyParseError('missing key field {0!r}'.format(name))
        value = jobj[name]
        if isinstance(value, bool) or not isinstance(value, int):
            raise errors.KeyParseError(
                'key field {0!r} must be an integer, got {1!r}'.format(name, value))
        numbers[name] = value

    public_numbers = ec.EllipticCurvePublicNumbers(
        numbers['X'], numbers['Y'], ec.SECP256R1())
    try:
        key = ec.EllipticCurvePrivateNumbers(numbers['D'], public_numbers).private_key()
    except ValueError as error:
        raise errors.KeyParseError('invalid P-256 key: {0}'.format(error))
    logger.debug('Loaded P-256 account key')
    return jose.JWKEC(key=key)


def dump_account_key(key: Union[jose.JWKEC, ec.EllipticCurvePrivateKey]) -> str:
    """Serialize a P-256 private key to the JSON accepted by `load_account_key`."""
    if isinstance(key, jose.JWKEC):
        key = key.key._wrapped  # pylint: disable=protected-access
    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise errors.KeyParseError('not an elliptic curve private key')
    if not isinstance(key.curve, ec.SECP256R1):
        raise errors.KeyParseError('unsupported curve {0}'.format(key.curve.name))
    private_numbers = key.private_numbers()
    return json.dumps({
        'D': private_numbers.private_value,
        'X': private_numbers.public_numbers.x,
        'Y': private_numbers.public_numbers.y,
    })
