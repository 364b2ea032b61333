"""Common Marshmallow helpers shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, pre_load

REQUIRED = "All fields are required"


class StrippedSchema(Schema):
    """Ignore unknown keys and trim whitespace around incoming strings.

    Password fields are passed through untouched.
    """

    class Meta:
        unknown = EXCLUDE

    _unstripped = frozenset({"password", "confirmPassword"})

    @pre_load
    def strip_strings(self, data: Any, **_: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            k: v.strip() if isinstance(v, str) and k not in self._unstripped else v
            for k, v in data.items()
        }
