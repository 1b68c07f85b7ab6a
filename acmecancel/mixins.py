"""Useful mixins for ACME message objects"""
from typing import Any

from acmecancel import fields


class FoldedNamesMixin:
    """
    This mixin lets `from_json` accept member names that differ only in
    case from the declared field names (e.g. ``Status`` for ``status``).
    """
    @classmethod
    def from_json(cls, jobj: Any) -> Any:
        """See josepy.JSONObjectWithFields.from_json()"""
        json_names = [field.json_name for field in cls._fields.values()]  # type: ignore[attr-defined]
        return super().from_json(fields.fold_names(jobj, json_names))  # type: ignore[misc]
