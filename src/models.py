from dataclasses import dataclass
from typing import Any, Dict, Optional

from errors import UpstreamError, ValidationError


@dataclass
class ChatRequest:
    """Validated POST body."""
    message: str
    user_id: str

    @classmethod
    def from_body(cls, body: Any) -> "ChatRequest":
        """
        Build a request from the parsed JSON body.

        Only presence is checked. Non-object bodies carry no fields, but a
        null body cannot be read at all.

        Raises:
            UpstreamError: body is JSON null
            ValidationError: message or userId missing or empty
        """
        if body is None:
            raise UpstreamError("Request body must be a JSON object, got null")
        if not isinstance(body, dict):
            body = {}
        message = body.get("message")
        user_id = body.get("userId")
        if not message or not user_id:
            raise ValidationError()
        return cls(message=str(message), user_id=str(user_id))


@dataclass
class ResponseEnvelope:
    """Uniform JSON body returned on every non-preflight path."""
    success: bool
    response: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, text: str) -> "ResponseEnvelope":
        return cls(success=True, response=text)

    @classmethod
    def failure(cls, message: str) -> "ResponseEnvelope":
        return cls(success=False, error=message)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"response": self.response, "success": True}
        return {"error": self.error, "success": False}
