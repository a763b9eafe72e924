"""Test reply envelope parsing."""
import pytest
from emarsys_sdk.errors import ClientError, ClientErrorKind
from emarsys_sdk.transport.envelope import ResponseEnvelope


def test_parse_success_envelope():
    envelope = ResponseEnvelope.parse({"replyCode": 0, "replyText": "OK", "data": {"id": 42}})
    assert envelope.reply_code == 0
    assert envelope.reply_text == "OK"
    assert envelope.data == {"id": 42}
    assert envelope.ok


def test_parse_without_data_defaults_empty():
    envelope = ResponseEnvelope.parse({"replyCode": 0, "replyText": "OK"})
    assert envelope.data == {}


def test_parse_null_data_defaults_empty():
    envelope = ResponseEnvelope.parse({"replyCode": 0, "replyText": "OK", "data": None})
    assert envelope.data == {}


def test_parse_keeps_list_payload():
    envelope = ResponseEnvelope.parse({"replyCode": 0, "replyText": "OK", "data": [{"id": 1}]})
    assert envelope.data == [{"id": 1}]


def test_non_zero_reply_is_not_ok():
    envelope = ResponseEnvelope.parse({"replyCode": 2008, "replyText": "No contact found"})
    assert not envelope.ok
    assert envelope.reply_code == 2008


@pytest.mark.parametrize("decoded", [
    {"replyCode": 0},
    {"replyText": "OK"},
    {"replyCode": None, "replyText": "OK"},
    ["dummy"],
])
def test_invalid_structure_raises(decoded):
    with pytest.raises(ClientError) as exc:
        ResponseEnvelope.parse(decoded)
    assert exc.value.kind == ClientErrorKind.INVALID_ENVELOPE
    assert "no replyCode or replyText" in str(exc.value)


def test_envelope_is_immutable():
    envelope = ResponseEnvelope.parse({"replyCode": 0, "replyText": "OK"})
    with pytest.raises(AttributeError):
        envelope.reply_code = 1


def test_to_dict():
    raw = {"replyCode": 0, "replyText": "OK", "data": {"id": 1}}
    assert ResponseEnvelope.parse(raw).to_dict() == raw
