"""Login session model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Session(BaseModel):
    """Proof of a completed (mock) login, persisted client-side."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    username: str
    email: str
    login_time: datetime = Field(alias="loginTime")

    def to_storage(self) -> str:
        """Serialize with the camelCase keys the stored entry uses."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_storage(cls, raw: str) -> "Session":
        """Parse a stored entry.

        Raises:
            pydantic.ValidationError: If the entry is not a valid session
        """
        return cls.model_validate_json(raw)
