"""Database path builder tests."""

import pytest

from pindown.domain.exceptions import ValidationException
from pindown.infrastructure.firebase import paths


def test_paths() -> None:
    assert paths.pin_path("p1") == "pins/p1"
    assert paths.user_pin_path("alice", "p1") == "user_pins/alice/p1"
    assert paths.block_path("p1", "b1") == "pin_blocks/p1/b1"
    assert paths.dataset_path("p1", "d1") == "pin_datasets/p1/d1"
    assert paths.pinboard_path("pb-1") == "pin_boards/pb-1"
    assert paths.user_pinboard_path("alice", "pb-1") == "user_pinboards/alice/pb-1"
    assert paths.workflow_data_path("p1", "wd_sales") == "workflow_data/p1/wd_sales"
    assert paths.api_key_path("alice", "key_1") == "api_keys/alice/key_1"
    assert paths.user_path("alice") == "users/alice"


@pytest.mark.parametrize("bad", ["", "../x", "a.b", "a/b", "a#b"])
def test_invalid_segment_rejected(bad: str) -> None:
    with pytest.raises(ValidationException):
        paths.pin_path(bad)
