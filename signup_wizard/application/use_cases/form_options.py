from __future__ import annotations

import logging

from signup_wizard.application.exceptions import BackendContractError, BackendUpstreamError
from signup_wizard.application.ports.form_options import FormOptionsPort
from signup_wizard.application.utils.option_labels import (
    CATEGORIES,
    CATEGORY_SLUGS,
    DEFAULT_FORM_OPTIONS,
    format_label,
)
from signup_wizard.domain.entities.form_option import FormOption, FormOptions


def resolve_options(
    category: str,
    raw_value: object,
    defaults: tuple[FormOption, ...],
) -> tuple[FormOption, ...]:
    """
    Parse a comma-separated option string into labelled options.
    Anything missing, non-string or yielding no tokens resolves to defaults.
    """
    if not raw_value or not isinstance(raw_value, str):
        return defaults

    values = [v.strip() for v in raw_value.split(",") if v.strip()]
    if not values:
        return defaults

    return tuple(FormOption(value=v, label=format_label(category, v)) for v in values)


def resolve_form_options(
    form_fields: dict[str, str],
    defaults: FormOptions = DEFAULT_FORM_OPTIONS,
) -> FormOptions:
    return FormOptions(
        **{
            category: resolve_options(category, form_fields.get(CATEGORY_SLUGS[category]), getattr(defaults, category))
            for category in CATEGORIES
        }
    )


class LoadFormOptionsUseCase:
    def __init__(self, source: FormOptionsPort, defaults: FormOptions = DEFAULT_FORM_OPTIONS) -> None:
        self._source = source
        self._defaults = defaults
        self._logger = logging.getLogger(__name__)

    def execute(self) -> FormOptions:
        try:
            form_fields = self._source.fetch_form_fields()
        except (BackendUpstreamError, BackendContractError) as e:
            self._logger.warning("Form options unavailable, using defaults", extra={"reason": str(e)})
            return self._defaults

        options = resolve_form_options(form_fields, self._defaults)
        fallen_back = [c for c in CATEGORIES if getattr(options, c) is getattr(self._defaults, c)]
        if fallen_back:
            self._logger.info("Default options used for %s", ", ".join(fallen_back))
        return options
