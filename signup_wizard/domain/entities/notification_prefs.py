from dataclasses import dataclass, field


@dataclass(frozen=True)
class NotificationPrefs:
    notification_types: tuple[str, ...] = field(default_factory=lambda: ("completed",))
    notification_channel: str = "email"
