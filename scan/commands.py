"""Platform REST requests for the scan resource."""

from typing import Any

from bus import HttpRequest


class CreateScan(HttpRequest[dict[str, Any], dict[str, Any]]):
    def __init__(self, payload: dict[str, Any]):
        super().__init__(
            type="CreateScan", payload=payload, url="/api/v1/scans", method="POST"
        )


class GetScan(HttpRequest[None, dict[str, Any]]):
    def __init__(self, scan_id: str):
        super().__init__(type="GetScan", payload=None, url=f"/api/v1/scans/{scan_id}")


class ListIssues(HttpRequest[None, list[dict[str, Any]]]):
    def __init__(self, scan_id: str):
        super().__init__(
            type="ListIssues", payload=None, url=f"/api/v1/scans/{scan_id}/issues"
        )


class StopScan(HttpRequest[None, None]):
    def __init__(self, scan_id: str):
        super().__init__(
            type="StopScan",
            payload=None,
            url=f"/api/v1/scans/{scan_id}/stop",
            expect_reply=False,
        )


class DeleteScan(HttpRequest[None, None]):
    def __init__(self, scan_id: str):
        super().__init__(
            type="DeleteScan",
            payload=None,
            url=f"/api/v1/scans/{scan_id}",
            method="DELETE",
            expect_reply=False,
        )
