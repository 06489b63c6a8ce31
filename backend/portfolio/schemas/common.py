"""Shared schema building blocks."""
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, model_validator

# Calendar month, zero-padded so periods sort lexicographically.
PERIOD_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class Payload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


class PartialUpdate(Payload):
    """PUT body: only the fields that were sent are applied.

    Unknown keys (including owning references such as ``project_id``) are
    ignored. An explicit ``null`` is rejected unless the field is listed in
    ``nullable_fields``.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{name} may not be null")
        return self


def unique_strings(values: list[str]) -> list[str]:
    """Strip, drop blanks and duplicates, keep first-seen order."""
    seen: dict[str, None] = {}
    for v in values:
        v = v.strip()
        if v:
            seen.setdefault(v, None)
    return list(seen)
