"""Unit tests for poll option value objects."""

import pydantic
import pytest

from portal.domain.value import PollOption, PollOptions


class TestPollOptions:
    """Tests for PollOptions validation at the store boundary."""

    def test_structured_list(self):
        options = PollOptions.model_validate(
            [{"id": 0, "text": "A", "votes": 3}, {"id": 1, "text": "B", "votes": 0}]
        )

        assert len(options) == 2
        assert options[0].votes == 3
        assert [o.text for o in options] == ["A", "B"]

    def test_legacy_json_string_of_records(self):
        options = PollOptions.model_validate('[{"id": 0, "text": "A", "votes": 1}]')

        assert options[0] == PollOption(id=0, text="A", votes=1)

    def test_legacy_bare_strings_get_positional_ids(self):
        options = PollOptions.model_validate(["Yes", "No"])

        assert [(o.id, o.text, o.votes) for o in options] == [
            (0, "Yes", 0),
            (1, "No", 0),
        ]

    def test_ids_out_of_order_are_rejected(self):
        with pytest.raises(pydantic.ValidationError, match="0..n-1"):
            PollOptions.model_validate([{"id": 1, "text": "A"}, {"id": 0, "text": "B"}])

    def test_malformed_json_is_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            PollOptions.model_validate("[not json")

    def test_negative_votes_are_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            PollOption(id=0, text="A", votes=-1)

    def test_options_are_immutable(self):
        option = PollOption(id=0, text="A")

        with pytest.raises(pydantic.ValidationError):
            option.votes = 5  # type: ignore[misc]
