from dataclasses import dataclass


@dataclass(frozen=True)
class ZipCheckResult:
    in_service_area: bool
    message: str | None = None
