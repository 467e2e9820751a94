"""Scan type definitions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ScanStatus(Enum):
    """Remote scan states."""

    PENDING = "pending"
    QUEUED = "queued"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"
    STOPPED = "stopped"
    DISRUPTED = "disrupted"


# QUEUED polls like an active scan but fails the wait if never admitted
ACTIVE_STATUSES: frozenset[ScanStatus] = frozenset(
    {ScanStatus.PENDING, ScanStatus.QUEUED, ScanStatus.RUNNING}
)

DONE_STATUSES: frozenset[ScanStatus] = frozenset(
    {ScanStatus.DONE, ScanStatus.FAILED, ScanStatus.STOPPED, ScanStatus.DISRUPTED}
)


class Severity(Enum):
    """Issue severity levels."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# Severities satisfying a threshold: the threshold itself and everything above it
SEVERITY_RANGES: dict[Severity, frozenset[Severity]] = {
    Severity.LOW: frozenset({Severity.LOW, Severity.MEDIUM, Severity.HIGH}),
    Severity.MEDIUM: frozenset({Severity.MEDIUM, Severity.HIGH}),
    Severity.HIGH: frozenset({Severity.HIGH}),
}


class TestType(Enum):
    """Vulnerability tests the engine can run."""

    # Keeps pytest from collecting this enum as a test class
    __test__ = False

    ANGULAR_CSTI = "angular_csti"
    BACKUP_LOCATIONS = "backup_locations"
    BROKEN_SAML_AUTH = "broken_saml_auth"
    BRUTE_FORCE_LOGIN = "brute_force_login"
    BUSINESS_CONSTRAINT_BYPASS = "business_constraint_bypass"
    COMMON_FILES = "common_files"
    COOKIE_SECURITY = "cookie_security"
    CSRF = "csrf"
    DATE_MANIPULATION = "date_manipulation"
    DEFAULT_LOGIN_LOCATION = "default_login_location"
    DIRECTORY_LISTING = "directory_listing"
    DOM_XSS = "dom_xss"
    EMAIL_INJECTION = "email_injection"
    EXPOSED_COUCH_DB_APIS = "exposed_couch_db_apis"
    FILE_UPLOAD = "file_upload"
    FULL_PATH_DISCLOSURE = "full_path_disclosure"
    HEADER_SECURITY = "header_security"
    HRS = "hrs"
    HTML_INJECTION = "html_injection"
    HTTP_METHOD_FUZZING = "http_method_fuzzing"
    HTTP_RESPONSE_SPLITTING = "http_response_splitting"
    ID_ENUMERATION = "id_enumeration"
    IMPROPER_ASSET_MANAGEMENT = "improper_asset_management"
    INSECURE_TLS_CONFIGURATION = "insecure_tls_configuration"
    JWT = "jwt"
    LDAPI = "ldapi"
    LFI = "lfi"
    MASS_ASSIGNMENT = "mass_assignment"
    NOSQL = "nosql"
    OPEN_BUCKETS = "open_buckets"
    OPEN_DATABASE = "open_database"
    OSI = "osi"
    PROTO_POLLUTION = "proto_pollution"
    RETIRE_JS = "retire_js"
    RFI = "rfi"
    SECRET_TOKENS = "secret_tokens"
    SERVER_SIDE_JS_INJECTION = "server_side_js_injection"
    SQLI = "sqli"
    SSRF = "ssrf"
    SSTI = "ssti"
    UNVALIDATED_REDIRECT = "unvalidated_redirect"
    VERSION_CONTROL_SYSTEMS = "version_control_systems"
    WORDPRESS = "wordpress"
    XPATHI = "xpathi"
    XSS = "xss"
    XXE = "xxe"


@dataclass(frozen=True)
class IssueGroup:
    """Number of issues found at one severity."""

    severity: Severity
    count: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "IssueGroup":
        return cls(severity=Severity(data["type"]), count=int(data.get("number", 0)))


@dataclass(frozen=True)
class ScanState:
    """Last observed remote status of a scan."""

    status: ScanStatus
    issues_by_severity: tuple[IssueGroup, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScanState":
        return cls(
            status=ScanStatus(data["status"]),
            issues_by_severity=tuple(
                IssueGroup.from_dict(group) for group in data.get("issuesBySeverity") or []
            ),
        )


@dataclass(frozen=True)
class Issue:
    """Vulnerability reported by a scan."""

    id: str
    name: str
    severity: Severity
    details: str | None = None
    remedy: str | None = None
    cvss: str | None = None
    link: str | None = None
    # Raw request/response evidence as returned by the API
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Issue":
        known = {"id", "name", "severity", "details", "remedy", "cvss", "link"}
        return cls(
            id=data["id"],
            name=data["name"],
            severity=Severity(data["severity"]),
            details=data.get("details"),
            remedy=data.get("remedy"),
            cvss=data.get("cvss"),
            link=data.get("link"),
            extra={key: value for key, value in data.items() if key not in known},
        )


@dataclass
class Target:
    """Entry point of the scan."""

    url: str
    method: str = "GET"
    headers: dict[str, str] | None = None
    body: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"url": self.url, "method": self.method}
        if self.headers:
            data["headers"] = self.headers
        if self.body is not None:
            data["body"] = self.body
        return data


@dataclass
class ScanConfig:
    """Scan creation parameters."""

    name: str
    tests: list[TestType]
    target: Target
    repeater_id: str | None = None
    module: str = "dast"
    discovery_types: list[str] = field(default_factory=lambda: ["crawler"])
    smart: bool = True
    skip_static_params: bool = True
    project_id: str | None = None

    def __post_init__(self):
        if not self.tests:
            raise ValueError("ScanConfig requires at least one test")

    def to_dict(self) -> dict[str, Any]:
        """Request body for the create-scan endpoint."""
        data: dict[str, Any] = {
            "name": self.name,
            "module": self.module,
            "tests": [test.value for test in self.tests],
            "discoveryTypes": self.discovery_types,
            "smart": self.smart,
            "skipStaticParams": self.skip_static_params,
            "target": self.target.to_dict(),
        }
        if self.repeater_id:
            data["repeaters"] = [self.repeater_id]
        if self.project_id:
            data["projectId"] = self.project_id
        return data
