from pydantic import BaseModel
from pydantic import ConfigDict


class MutableModel(BaseModel):
    """Base class for pydantic models holding state that changes while a wait runs.

    Assignments are validated so a session can never hold a value its fields reject.
    """

    model_config = ConfigDict(
        frozen=False,
        extra="forbid",
        arbitrary_types_allowed=False,
        validate_assignment=True,
    )
