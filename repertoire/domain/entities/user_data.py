"""Per-user reference lists (band member roles, guitar tunings, ...).

Every reference list is a positioned collection whose parent is the user.
"""

from enum import StrEnum
from uuid import UUID, uuid4

from attrs import define, field, validators


class ReferenceKind(StrEnum):
    """Kinds of per-user reference lists."""

    BAND_MEMBER_ROLE = "band_member_role"
    GUITAR_TUNING = "guitar_tuning"
    SECTION_TYPE = "section_type"
    INSTRUMENT = "instrument"


@define(frozen=True, slots=True)
class ReferenceItem:
    """An entry of a user's reference list."""

    user_id: UUID
    kind: ReferenceKind = field(converter=ReferenceKind)
    name: str = field(validator=validators.instance_of(str))
    order: int = field(default=0, validator=validators.ge(0))
    id: UUID = field(factory=uuid4)
