"""Bus messages and REST requests used by repeaters."""

from typing import Any, Optional

from bus import Command, Event, HttpRequest
from .models import RepeaterStatus


class RegisterRepeaterCommand(Command[dict[str, Any], dict[str, Any]]):
    """Announces a repeater to the platform; the reply carries the accepted version or an error."""

    def __init__(self, repeater_id: str, version: str):
        super().__init__(
            type="RepeaterRegistering",
            payload={"repeaterId": repeater_id, "version": version},
        )


class RepeaterStatusEvent(Event[dict[str, Any]]):
    def __init__(self, repeater_id: str, status: RepeaterStatus):
        super().__init__(
            type="RepeaterStatusUpdated",
            payload={"repeaterId": repeater_id, "status": status.value},
        )


class CreateRepeaterRequest(HttpRequest[dict[str, Any], dict[str, Any]]):
    def __init__(self, name: str, description: Optional[str] = None):
        payload: dict[str, Any] = {"name": name}
        if description:
            payload["description"] = description
        super().__init__(
            type="CreateRepeater", payload=payload, url="/api/v1/repeaters", method="POST"
        )


class ListRepeatersRequest(HttpRequest[None, list[dict[str, Any]]]):
    def __init__(self):
        super().__init__(type="ListRepeaters", payload=None, url="/api/v1/repeaters")


class DeleteRepeaterRequest(HttpRequest[None, None]):
    def __init__(self, repeater_id: str):
        super().__init__(
            type="DeleteRepeater",
            payload=None,
            url=f"/api/v1/repeaters/{repeater_id}",
            method="DELETE",
            expect_reply=False,
        )
