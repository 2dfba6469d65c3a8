"""Tests for JsonAdapter."""

import json
from datetime import datetime, timezone

import pytest

from pass_client.adapters import JsonAdapter
from pass_client.errors import RequestError
from pass_client.models import AwardStatus, Grant, User

CONTEXT = "https://oa-pass.github.io/pass-data-model/src/main/resources/context-3.4.jsonld"


@pytest.fixture
def adapter() -> JsonAdapter:
    return JsonAdapter(context=CONTEXT)


class TestToDocument:
    """Tests for converting entities to JSON-LD documents."""

    def test_uses_camel_case_and_type_tag(self, adapter: JsonAdapter) -> None:
        grant = Grant(award_number="A1", award_status=AwardStatus.PRE_AWARD, local_key="k")

        document = adapter.to_document(grant)

        assert document == {
            "@type": "Grant",
            "@context": CONTEXT,
            "awardNumber": "A1",
            "awardStatus": "pre-award",
            "localKey": "k",
        }

    def test_omits_empty_lists_and_version_tag(self, adapter: JsonAdapter) -> None:
        grant = Grant(award_number="A1", co_pis=[], version_tag='"3"')

        document = adapter.to_document(grant)

        assert "coPis" not in document
        assert "versionTag" not in document
        assert "version_tag" not in document

    def test_include_context_false_removes_context(self, adapter: JsonAdapter) -> None:
        grant = Grant.model_validate({"@context": CONTEXT, "awardNumber": "A1"})

        assert "@context" not in adapter.to_document(grant, include_context=False)

    def test_keeps_entity_context(self, adapter: JsonAdapter) -> None:
        grant = Grant.model_validate({"@context": "http://example.org/ctx", "awardNumber": "A1"})

        assert adapter.to_document(grant)["@context"] == "http://example.org/ctx"

    def test_dates_are_utc_with_milliseconds(self, adapter: JsonAdapter) -> None:
        grant = Grant(award_date=datetime(2018, 1, 1, 12, 30, 5, 123456, tzinfo=timezone.utc))

        assert adapter.to_document(grant)["awardDate"] == "2018-01-01T12:30:05.123Z"

    def test_to_json_is_utf8(self, adapter: JsonAdapter) -> None:
        user = User(first_name="Zoë")

        data = adapter.to_json(user)

        assert isinstance(data, bytes)
        assert json.loads(data.decode("utf-8"))["firstName"] == "Zoë"


class TestToModel:
    """Tests for decoding repository responses."""

    def test_decodes_single_node(self, adapter: JsonAdapter) -> None:
        data = json.dumps(
            {
                "@id": "http://localhost/grants/1",
                "@type": "Grant",
                "awardNumber": "A1",
                "awardDate": "2018-01-01T00:00:00.000Z",
                "unknownField": "ignored",
            }
        )

        grant = adapter.to_model(data, Grant)

        assert grant.id == "http://localhost/grants/1"
        assert grant.award_number == "A1"
        assert grant.award_date == datetime(2018, 1, 1, tzinfo=timezone.utc)

    def test_selects_typed_node_from_graph(self, adapter: JsonAdapter) -> None:
        data = json.dumps(
            {
                "@context": CONTEXT,
                "@graph": [
                    {"@id": "http://localhost/users/1", "pi": {"@id": "http://localhost/grants/1"}},
                    {"@id": "http://localhost/grants/1", "@type": "Grant", "awardNumber": "A1"},
                ],
            }
        )

        grant = adapter.to_model(data, Grant)

        assert grant.id == "http://localhost/grants/1"
        assert grant.context == CONTEXT

    def test_accepts_list_of_types(self, adapter: JsonAdapter) -> None:
        data = json.dumps(
            {
                "@id": "http://localhost/grants/1",
                "@type": ["Grant", "http://www.w3.org/ns/ldp#Container"],
            }
        )

        assert adapter.to_model(data, Grant).type == "Grant"

    def test_invalid_json_raises_request_error(self, adapter: JsonAdapter) -> None:
        with pytest.raises(RequestError):
            adapter.to_model(b"<html>", Grant)

    def test_wrong_type_raises_request_error(self, adapter: JsonAdapter) -> None:
        with pytest.raises(RequestError):
            adapter.to_model(json.dumps({"@type": "User"}), Grant)

    def test_graph_without_typed_node_raises(self, adapter: JsonAdapter) -> None:
        with pytest.raises(RequestError):
            adapter.to_model(json.dumps({"@graph": [{"@id": "x"}]}), Grant)
