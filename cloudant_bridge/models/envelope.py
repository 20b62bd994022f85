"""
Result envelope model.

Dependencies: pydantic
System role: Uniform outbound contract for every read strategy
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cloudant_bridge.core.exceptions import DocumentNotFound


class ResultEnvelope(BaseModel):
    """Normalized read result plus the raw backend response."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    payload: Any = Field(
        default=None,
        description="Single document, list of documents, or None",
    )
    raw: Any = Field(
        default=None,
        description="Unmodified backend response body",
    )
    warning: DocumentNotFound | None = Field(
        default=None,
        description="Set when a lookup by id found nothing",
    )

    def apply_to(self, msg: dict[str, Any]) -> dict[str, Any]:
        """
        Write the result onto an outbound message.

        The raw response goes under `cloudant`; a message with no raw
        response keeps whatever `cloudant` value it arrived with.

        Args:
            msg: Inbound message, updated in place

        Returns:
            dict: The same message object
        """
        msg["payload"] = self.payload
        if self.raw is not None:
            msg["cloudant"] = self.raw
        return msg
