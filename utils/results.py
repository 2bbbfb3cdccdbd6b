from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ActionResult:
    """Outcome of a user- or admin-facing action, shaped for a JSON response."""
    success: bool
    error: Optional[str] = None
    message: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, message=None, **data):
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, error):
        return cls(success=False, error=error)

    def as_dict(self):
        payload = {'success': self.success}
        if self.error is not None:
            payload['error'] = self.error
        if self.message is not None:
            payload['message'] = self.message
        payload.update(self.data)
        return payload
