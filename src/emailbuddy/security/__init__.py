"""Security utilities -- prompt injection defense, input validation, credentials."""
from .prompt_guard import wrap_user_content, detect_injection_attempt
from .secrets import SecretStore, SecretStoreError
from .validators import (
    ValidationError,
    validate_length,
    validate_not_empty,
    validate_in_choices,
    validate_int_range,
    validate_list_size,
)
