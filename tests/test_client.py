"""Test the client facade over the endpoint table."""
import pytest
from emarsys_sdk.client import EmarsysClient
from emarsys_sdk.constants import CampaignType, EmailStatus
from emarsys_sdk.errors import ClientError, ClientErrorKind

from tests.stubs import StubTransport

BASE_URL = "https://suite.example.test/api/v2/"


def test_default_mapping_loaded_from_reference(client):
    assert client.resolve_field_id("email") == 3
    assert client.resolve_choice_name("gender", 1) == "Male"


def test_explicit_mapping_overrides_reference():
    client = EmarsysClient(
        "u", "s",
        transport=StubTransport(),
        fields_mapping={"loyalty_tier": 7147},
        choices_mapping={"loyalty_tier": {"gold": 1}},
    )
    assert client.mapping.fields == {"loyalty_tier": 7147}
    assert client.resolve_choice_id("loyalty_tier", "gold") == 1
    with pytest.raises(ClientError):
        client.resolve_field_id("email")


def test_live_base_url_by_default():
    transport = StubTransport()
    EmarsysClient("u", "s", transport=transport).get_settings()
    assert transport.last["url"] == "https://api.emarsys.net/api/v2/settings"


def test_create_contact_resolves_fields(client, transport):
    client.add_fields_mapping({"loyalty_tier": 7147})
    client.create_contact({"email": "jo@example.com", "loyalty_tier": "gold", "31": 1})

    assert transport.last["method"] == "POST"
    assert transport.last["url"] == BASE_URL + "contact"
    assert transport.last_body == {"3": "jo@example.com", "7147": "gold", "31": 1}


def test_update_contact_resolves_batch(client, transport):
    client.add_fields_mapping({"email_field_name": 7})
    client.update_contact({
        "key_id": "3",
        "contacts": [{"3": "a@example.com"}, {"email_field_name": "b@example.com"}],
    })

    assert transport.last["method"] == "PUT"
    assert transport.last_body == {
        "key_id": "3",
        "contacts": [{"3": "a@example.com"}, {"7": "b@example.com"}],
    }


def test_update_contact_and_create_if_not_exists(client, transport):
    client.update_contact_and_create_if_not_exists({"email": "jo@example.com"})
    assert transport.last["method"] == "PUT"
    assert transport.last["url"] == BASE_URL + "contact/?create_if_not_exists=1"


def test_unknown_field_aborts_before_network(client, transport):
    with pytest.raises(ClientError) as exc:
        client.create_contact({"nickname": "jo"})
    assert exc.value.kind == ClientErrorKind.FIELD_NOT_FOUND
    assert transport.requests == []


def test_delete_contact_body_not_resolved(client, transport):
    client.delete_contact({"key_id": "email", "email": "jo@example.com"})
    assert transport.last["url"] == BASE_URL + "contact/delete"
    assert transport.last_body == {"key_id": "email", "email": "jo@example.com"}


def test_get_contact_id_returns_id(client, transport):
    transport.replies.append({"replyCode": 0, "replyText": "OK", "data": {"id": "123456"}})
    assert client.get_contact_id("3", "jo@example.com") == 123456
    assert transport.last["url"] == BASE_URL + "contact/3=jo@example.com"


def test_get_contact_id_resolves_field_name(client, transport):
    transport.replies.append({"replyCode": 0, "replyText": "OK", "data": {"id": 9}})
    client.get_contact_id("email", "jo@example.com")
    assert transport.last["url"] == BASE_URL + "contact/3=jo@example.com"


def test_get_contact_id_missing_raises_with_reply(client, transport):
    transport.replies.append({"replyCode": 2008, "replyText": "No contact found with the external id: 3"})
    with pytest.raises(ClientError) as exc:
        client.get_contact_id(3, "nobody@example.com")
    assert exc.value.kind == ClientErrorKind.REPLY
    assert exc.value.reply_code == 2008
    assert "No contact found" in str(exc.value)


def test_contact_list_routes(client, transport):
    client.delete_contact_list("123")
    assert (transport.last["method"], transport.last["url"]) == ("POST", BASE_URL + "contactlist/123/deletelist")

    client.add_contacts_to_contact_list("123", {"key_id": "3", "external_ids": ["a@example.com"]})
    assert transport.last["url"] == BASE_URL + "contactlist/123/add"

    client.remove_contacts_from_contact_list("123", {"key_id": "3", "external_ids": ["a@example.com"]})
    assert transport.last["url"] == BASE_URL + "contactlist/123/delete"

    client.get_contacts_from_contact_list("123", {"limit": 10})
    assert (transport.last["method"], transport.last["url"]) == ("GET", BASE_URL + "contactlist/123/contacts")

    client.check_contact_in_list(42, 123)
    assert transport.last["url"] == BASE_URL + "contactlist/123/contacts/42"


def test_get_emails_query(client, transport):
    client.get_emails()
    assert transport.last["url"] == BASE_URL + "email"

    client.get_emails(EmailStatus.READY_TO_LAUNCH, 123, [CampaignType.ADHOC, "recurring"])
    assert transport.last["url"] == (
        BASE_URL + "email/status=4&contactlist=123&campaign_type=adhoc%2Crecurring"
    )


def test_get_email_response_summary_query(client, transport):
    client.get_email_response_summary("55")
    assert transport.last["url"] == BASE_URL + "email/55/responsesummary"

    client.get_email_response_summary("55", start_date="2024-01-01", launch_id=7)
    assert transport.last["url"] == BASE_URL + "email/55/responsesummary/start_date=2024-01-01&launch_id=7"


def test_email_routes(client, transport):
    client.launch_email("55", {"schedule": "2024-05-17 10:00"})
    assert transport.last["url"] == BASE_URL + "email/55/launch"
    client.preview_email("55", {"version": "html"})
    assert transport.last["url"] == BASE_URL + "email/55/preview"
    client.get_email("55")
    assert (transport.last["method"], transport.last["url"]) == ("GET", BASE_URL + "email/55")
    client.send_email_test("55", {"recipientlist": "a@example.com"})
    assert transport.last["url"] == BASE_URL + "email/55/sendtestmail"


def test_get_field_choices_resolves_name(client, transport):
    client.get_field_choices("gender")
    assert transport.last["url"] == BASE_URL + "field/5/choice"
    client.get_field_choices(9)
    assert transport.last["url"] == BASE_URL + "field/9/choice"


def test_create_custom_field(client, transport):
    client.create_custom_field("loyalty_tier", "shorttext")
    assert transport.last_body == {"name": "loyalty_tier", "application_type": "shorttext"}


def test_create_custom_field_rejects_system_type(client, transport):
    with pytest.raises(ClientError, match="system type") as exc:
        client.create_custom_field("x", "singlechoice")
    assert exc.value.kind == ClientErrorKind.FIELD_TYPE_NOT_CREATABLE
    with pytest.raises(ClientError, match="cannot be created via API. hologram"):
        client.create_custom_field("x", "hologram")
    assert transport.requests == []


def test_delete_source_uses_delete(client, transport):
    client.delete_source("77")
    assert (transport.last["method"], transport.last["url"]) == ("DELETE", BASE_URL + "source/77/delete")


def test_add_blacklist_entries(client, transport):
    client.add_blacklist_entries(emails=["a@example.com"])
    assert transport.last_body == {"emails": ["a@example.com"], "domains": []}


def test_trigger_event(client, transport):
    client.trigger_event("12", {"key_id": "3", "external_id": "a@example.com"})
    assert transport.last["url"] == BASE_URL + "event/12/trigger"


def test_call_unknown_endpoint(client):
    with pytest.raises(KeyError, match="Unknown endpoint"):
        client.call("teleport")


def test_non_zero_reply_returned(client, transport):
    transport.replies.append({"replyCode": 10001, "replyText": "Invalid data"})
    response = client.create_email({"name": "x"})
    assert not response.ok
    assert response.reply_code == 10001


def test_context_manager_closes_owned_transport(monkeypatch):
    with EmarsysClient("u", "s") as client:
        closed = []
        monkeypatch.setattr(client.transport, "close", lambda: closed.append(True))
    assert closed == [True]
