"""ACME JSON fields."""
import logging
from typing import Any
from typing import Dict
from typing import Iterable
from typing import Mapping
from typing import Optional

import josepy as jose

logger = logging.getLogger(__name__)


class Fixed(jose.Field):
    """Fixed field."""

    def __init__(self, json_name: str, value: Any) -> None:
        self.value = value
        super().__init__(
            json_name=json_name, default=value, omitempty=False)

    def decode(self, value: Any) -> Any:
        if value != self.value:
            raise jose.DeserializationError('Expected {0!r}'.format(self.value))
        return self.value

    def encode(self, value: Any) -> Any:
        if value != self.value:
            logger.warning(
                'Overriding fixed field (%s) with %r', self.json_name, value)
        return value


def fixed(json_name: str, value: Any) -> Any:
    """Generates a type-friendly Fixed field."""
    return Fixed(json_name, value)


def _decode_string(value: Any) -> Optional[str]:
    # JSON null decodes like an absent member
    if value is not None and not isinstance(value, str):
        raise jose.DeserializationError(
            'Expected a string, got {0!r}'.format(value))
    return value


def string(json_name: str, **kwargs: Any) -> Any:
    """Generates an optional string field that rejects non-string JSON values."""
    kwargs.setdefault('omitempty', True)
    return jose.field(json_name, decoder=_decode_string, **kwargs)


def fold_names(jobj: Mapping[str, Any], json_names: Iterable[str]) -> Dict[str, Any]:
    """Copy of ``jobj`` with members renamed to ``json_names`` where the
    names differ only in case. An exact match wins over a case-insensitive one.
    """
    folded = dict(jobj)
    for name in json_names:
        if name in jobj:
            continue
        for key, value in jobj.items():
            if key.lower() == name.lower():
                folded[name] = value
                break
    return folded
