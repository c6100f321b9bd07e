from __future__ import annotations

import re

from signup_wizard.domain.entities.form_option import FormOption, FormOptions

CATEGORIES = (
    "number_of_dogs",
    "frequency",
    "last_cleaned",
    "gate_location",
    "notification_types",
    "notification_channels",
)

# Slug used by the option document for each category
CATEGORY_SLUGS = {
    "number_of_dogs": "number_of_dogs",
    "frequency": "clean_up_frequency",
    "last_cleaned": "last_time_yard_was_thoroughly_cleaned",
    "gate_location": "gate_location",
    "notification_types": "cleanup_notification_type",
    "notification_channels": "cleanup_notification_chanel",  # sic, upstream spelling
}

LABELS: dict[str, dict[str, str]] = {
    "frequency": {
        "once_a_week": "Weekly",
        "two_times_a_week": "Twice Weekly",
        "bi_weekly": "Bi-Weekly (Every 2 Weeks)",
        "once_a_month": "Monthly",
        "one_time": "One-Time Cleanup",
    },
    "last_cleaned": {
        "one_week": "Less than 1 week ago",
        "two_weeks": "1-2 weeks ago",
        "three_weeks": "2-3 weeks ago",
        "one_month": "About a month ago",
        "two_months": "About 2 months ago",
        "3-4_months": "3-4 months ago",
        "5-6_months": "5-6 months ago",
        "7-9_months": "7-9 months ago",
        "10+_months": "10+ months / Never",
    },
    "gate_location": {
        "left": "Left Side",
        "right": "Right Side",
        "alley": "Alley",
        "no_gate": "No Gate",
        "other": "Other",
    },
    "notification_types": {
        "off_schedule": "Off Schedule Alerts",
        "on_the_way": "On The Way Notifications",
        "completed": "Service Completed",
    },
    "notification_channels": {
        "email": "Email",
        "sms": "Text Message (SMS)",
        "call": "Phone Call",
    },
}


def _opts(*pairs: tuple[str, str]) -> tuple[FormOption, ...]:
    return tuple(FormOption(value=v, label=l) for v, l in pairs)


DEFAULT_FORM_OPTIONS = FormOptions(
    number_of_dogs=_opts(("1", "1 Dog"), ("2", "2 Dogs"), ("3", "3 Dogs"), ("4", "4 Dogs"), ("5", "5+ Dogs")),
    frequency=_opts(
        ("once_a_week", "Weekly"),
        ("two_times_a_week", "Twice Weekly"),
        ("bi_weekly", "Bi-Weekly (Every 2 Weeks)"),
        ("once_a_month", "Monthly"),
        ("one_time", "One-Time Cleanup"),
    ),
    last_cleaned=_opts(
        ("one_week", "Less than 1 week ago"),
        ("two_weeks", "1-2 weeks ago"),
        ("three_weeks", "2-3 weeks ago"),
        ("one_month", "About a month ago"),
        ("two_months", "About 2 months ago"),
        ("3-4_months", "3-4 months ago"),
        ("5-6_months", "5-6 months ago"),
        ("10+_months", "10+ months / Never"),
    ),
    gate_location=_opts(
        ("left", "Left Side"),
        ("right", "Right Side"),
        ("alley", "Alley"),
        ("no_gate", "No Gate"),
        ("other", "Other"),
    ),
    notification_types=_opts(
        ("off_schedule", "Off Schedule Alerts"),
        ("on_the_way", "On The Way Notifications"),
        ("completed", "Service Completed"),
    ),
    notification_channels=_opts(
        ("email", "Email"),
        ("sms", "Text Message (SMS)"),
        ("call", "Phone Call"),
    ),
)


def title_case(value: str) -> str:
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), value.replace("_", " "))


def format_label(category: str, value: str) -> str:
    """Turn a raw option token into a customer-facing label."""
    if category == "number_of_dogs":
        match = re.match(r"\s*(\d+)", value)
        if not match:
            return value
        num = int(match.group(1))
        return "1 Dog" if num == 1 else f"{num} Dogs"

    known = LABELS.get(category, {})
    if value in known:
        return known[value]
    return title_case(value)
