"""
Unit tests for the canned OpenAPI responses.
"""

from charcole.swagger import get_common_responses

EXPECTED_NAMES = {"Success", "ValidationError", "Unauthorized", "Forbidden", "NotFound", "InternalError"}


def _properties(response):
    return response["content"]["application/json"]["schema"]["properties"]


class TestCommonResponses:

    def test_six_named_responses(self):
        assert set(get_common_responses()) == EXPECTED_NAMES

    def test_idempotent(self):
        assert get_common_responses() == get_common_responses()

    def test_each_call_returns_a_fresh_copy(self):
        first = get_common_responses()
        first["Success"]["description"] = "changed"
        del first["NotFound"]

        second = get_common_responses()
        assert second["Success"]["description"] == "Success"
        assert "NotFound" in second

    def test_every_response_has_description_and_envelope(self):
        for name, response in get_common_responses().items():
            assert response["description"], name
            properties = _properties(response)
            assert properties["success"]["type"] == "boolean"
            assert properties["message"]["type"] == "string"

    def test_success_envelope(self):
        properties = _properties(get_common_responses()["Success"])

        assert properties["success"]["example"] is True
        assert properties["data"] == {"type": "object"}

    def test_validation_error_lists_field_errors(self):
        properties = _properties(get_common_responses()["ValidationError"])

        assert properties["success"]["example"] is False
        assert properties["errors"]["type"] == "array"
        assert set(properties["errors"]["items"]["properties"]) == {"field", "message"}

    def test_error_responses_carry_no_payload(self):
        responses = get_common_responses()
        for name in ("Unauthorized", "Forbidden", "NotFound", "InternalError"):
            properties = _properties(responses[name])
            assert set(properties) == {"success", "message"}
            assert properties["success"]["example"] is False
