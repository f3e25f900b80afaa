# backend/paracal/schemas/common.py
from typing import Literal
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

LeaveType = Literal[
    "vacation",
    "personal",
    "sick",
    "absent",
    "maternity",
    "bereavement",
    "study",
    "military",
    "sabbatical",
    "unpaid",
    "compensatory",
    "other",
]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
