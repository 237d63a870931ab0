"""User-facing wording for filter validation errors."""

from ..models.results import FilterErrorCode

MESSAGE_TEMPLATES: dict[str, str] = {
    FilterErrorCode.REQUIRED_FIELD.value: "{label} is required.",
    FilterErrorCode.INVALID_TYPE.value: "{label} has an invalid format.",
    FilterErrorCode.INVALID_VALUE.value: "Please select a valid option for {label}.",
    FilterErrorCode.INVALID_VALUES.value: "Please select a valid option for {label}.",
    FilterErrorCode.MAX_LENGTH_EXCEEDED.value: "{label} is too long.",
    FilterErrorCode.MAX_ITEMS_EXCEEDED.value: "Too many options selected for {label}.",
    FilterErrorCode.INVALID_FORMAT.value: "{label} format is not valid.",
}


def user_friendly_message(code: str, label: str, technical_message: str) -> str:
    """Phrase an error code for display; unknown codes keep the technical message."""
    template = MESSAGE_TEMPLATES.get(code)
    if template is None:
        return technical_message
    return template.format(label=label)
