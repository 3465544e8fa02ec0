"""Realtime Database tree layout (schema-in-code).

The database has no DDL or migrations; nodes appear on first write. Use
these constants and builders so paths stay consistent and act as the single
source of truth for the "schema", including the hand-maintained indices
(user_pins, user_pinboards, pin_blocks, pin_datasets).

Example:
    store.update({
        pin_path(pid): record,
        user_pin_path(uid, pid): index_entry,
    })
"""

from pindown.domain.exceptions import ValidationException
from pindown.domain.value_objects import is_valid_key

# Primary records
NODE_PINS = "pins"
NODE_PIN_BOARDS = "pin_boards"
NODE_USERS = "users"
NODE_API_KEYS = "api_keys"

# Owned children (keyed by parent pin id)
NODE_PIN_BLOCKS = "pin_blocks"
NODE_PIN_DATASETS = "pin_datasets"
NODE_WORKFLOW_DATA = "workflow_data"

# Secondary indices (keyed by owner id)
NODE_USER_PINS = "user_pins"
NODE_USER_PINBOARDS = "user_pinboards"


def validate_key(key: str, field: str = "id") -> str:
    """Return key unchanged if it is a legal path segment.

    Raises:
        ValidationException: If key is empty or contains . $ # [ ] /
    """
    if not isinstance(key, str) or not is_valid_key(key):
        raise ValidationException(
            f"Invalid {field}: must be non-empty and not contain . $ # [ ] /",
            field=field,
        )
    return key


def _join(*segments: str) -> str:
    return "/".join(validate_key(s) for s in segments)


def pin_path(pin_id: str) -> str:
    return f"{NODE_PINS}/{_join(pin_id)}"


def user_pins_path(user_id: str) -> str:
    return f"{NODE_USER_PINS}/{_join(user_id)}"


def user_pin_path(user_id: str, pin_id: str) -> str:
    return f"{NODE_USER_PINS}/{_join(user_id, pin_id)}"


def pin_blocks_path(pin_id: str) -> str:
    return f"{NODE_PIN_BLOCKS}/{_join(pin_id)}"


def block_path(pin_id: str, block_id: str) -> str:
    return f"{NODE_PIN_BLOCKS}/{_join(pin_id, block_id)}"


def pin_datasets_path(pin_id: str) -> str:
    return f"{NODE_PIN_DATASETS}/{_join(pin_id)}"


def dataset_path(pin_id: str, dataset_id: str) -> str:
    return f"{NODE_PIN_DATASETS}/{_join(pin_id, dataset_id)}"


def pinboard_path(pinboard_id: str) -> str:
    return f"{NODE_PIN_BOARDS}/{_join(pinboard_id)}"


def user_pinboards_path(user_id: str) -> str:
    return f"{NODE_USER_PINBOARDS}/{_join(user_id)}"


def user_pinboard_path(user_id: str, pinboard_id: str) -> str:
    return f"{NODE_USER_PINBOARDS}/{_join(user_id, pinboard_id)}"


def pin_workflow_data_path(pin_id: str) -> str:
    return f"{NODE_WORKFLOW_DATA}/{_join(pin_id)}"


def workflow_data_path(pin_id: str, workflow_id: str) -> str:
    return f"{NODE_WORKFLOW_DATA}/{_join(pin_id, workflow_id)}"


def user_api_keys_path(user_id: str) -> str:
    return f"{NODE_API_KEYS}/{_join(user_id)}"


def api_key_path(user_id: str, key_id: str) -> str:
    return f"{NODE_API_KEYS}/{_join(user_id, key_id)}"


def user_path(uid: str) -> str:
    return f"{NODE_USERS}/{_join(uid)}"
