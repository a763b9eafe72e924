"""
Emarsys Client — API Facade.

One client per Emarsys account. It owns:
- the immutable credentials (inside a WsseSigner)
- a MappingTable seeded from reference data, extensible at runtime
- a Dispatcher bound to an HTTP transport

Endpoint methods are thin: look up the route in the endpoint table, fill
its template, resolve contact field names where the route asks for it,
and hand off to the dispatcher. Each returns a ResponseEnvelope whose
reply code the caller is expected to check.

Example Usage:
    with EmarsysClient("acme001", "s3cr3t") as client:
        client.add_fields_mapping({"loyalty_tier": 7147})
        response = client.create_contact({"email": "jo@example.com", "loyalty_tier": "gold"})
        if not response.ok:
            ...
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Iterable, Mapping
import logging

from emarsys_sdk.config import DEFAULT_MAX_JSON_DEPTH, DEFAULT_TIMEOUT, EmarsysConfig
from emarsys_sdk.constants import CREATABLE_APPLICATION_TYPES, LIVE_BASE_URL, ApplicationType
from emarsys_sdk.endpoints import get_endpoint, with_query
from emarsys_sdk.errors import ClientError
from emarsys_sdk.mapping.table import MappingTable, NumericFieldId, field_ref
from emarsys_sdk.transport.dispatcher import Dispatcher
from emarsys_sdk.transport.envelope import ResponseEnvelope
from emarsys_sdk.transport.http import HttpTransport, HttpxTransport
from emarsys_sdk.transport.signer import WsseSigner

logger = logging.getLogger(__name__)


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class EmarsysClient:
    """Synchronous client for the Emarsys v2 REST API."""

    def __init__(
        self,
        username: str,
        secret: str,
        base_url: str | None = None,
        *,
        transport: HttpTransport | None = None,
        fields_mapping: Mapping[str, Any] | None = None,
        choices_mapping: Mapping[str, Mapping[str, Any]] | None = None,
        fields_path: str | None = None,
        choices_path: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_json_depth: int = DEFAULT_MAX_JSON_DEPTH,
        raw_digest: bool = False,
    ):
        self.base_url = base_url or LIVE_BASE_URL

        if fields_mapping is None or choices_mapping is None:
            reference = MappingTable.from_reference(fields_path, choices_path)
            if fields_mapping is None:
                fields_mapping = reference.fields
            if choices_mapping is None:
                choices_mapping = reference.choices
        self.mapping = MappingTable(fields_mapping, choices_mapping)

        self._owns_transport = transport is None
        self.transport = transport or HttpxTransport(timeout=timeout)
        self.dispatcher = Dispatcher(
            signer=WsseSigner(username, secret, raw_digest=raw_digest),
            transport=self.transport,
            base_url=self.base_url,
            max_json_depth=max_json_depth,
        )
        logger.debug(f"Client initialized | username={username} | base_url={self.base_url}")

    @classmethod
    def from_config(
        cls,
        config: EmarsysConfig,
        transport: HttpTransport | None = None,
    ) -> EmarsysClient:
        return cls(
            config.username,
            config.secret,
            config.base_url,
            transport=transport,
            fields_path=config.fields_path,
            choices_path=config.choices_path,
            timeout=config.timeout,
            max_json_depth=config.max_json_depth,
        )

    @classmethod
    def from_env(cls, prefix: str = "EMARSYS_") -> EmarsysClient:
        return cls.from_config(EmarsysConfig.from_env(prefix))

    # --- Lifecycle ---

    def close(self) -> None:
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> EmarsysClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- Mapping ---

    def add_fields_mapping(self, mapping: Mapping[str, Any]) -> None:
        """Add custom field mappings, e.g. {"myCustomField": 7147}."""
        self.mapping.add_fields_mapping(mapping)

    def add_choices_mapping(self, mapping: Mapping[str, Any]) -> None:
        """Add custom choice mappings, e.g. {"myCustomField": {"gold": 1}}."""
        self.mapping.add_choices_mapping(mapping)

    def resolve_field_id(self, name: str) -> int | str:
        return self.mapping.resolve_field_id(name)

    def resolve_field_name(self, field_id: Any) -> Any:
        return self.mapping.resolve_field_name(field_id)

    def resolve_choice_id(self, field: Any, choice: str) -> int:
        return self.mapping.resolve_choice_id(field, choice)

    def resolve_choice_name(self, field: Any, choice_id: Any) -> Any:
        return self.mapping.resolve_choice_name(field, choice_id)

    def _field_path_id(self, field: Any) -> Any:
        ref = field_ref(field)
        if isinstance(ref, NumericFieldId):
            return ref.value
        return self.mapping.resolve_field_id(ref.value)

    # --- Core call ---

    def call(
        self,
        name: str,
        body: Mapping[Any, Any] | None = None,
        query: Mapping[str, Any] | None = None,
        **params: Any,
    ) -> ResponseEnvelope:
        """Invoke any endpoint of the table by operation name."""
        endpoint = get_endpoint(name)
        path = with_query(endpoint.render(**params), dict(query or {}))
        payload = dict(body or {})
        if endpoint.resolve_fields:
            payload = self.mapping.resolve_contact_body(payload)
        return self.dispatcher.send(endpoint.method, path, payload, operation=endpoint.name)

    # --- Conditions ---

    def get_conditions(self) -> ResponseEnvelope:
        return self.call("get_conditions")

    # --- Contacts ---

    def create_contact(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        """Create one or more contacts; field names are resolved to ids."""
        return self.call("create_contact", data)

    def update_contact(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("update_contact", data)

    def update_contact_and_create_if_not_exists(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("update_contact_and_create_if_not_exists", data)

    def delete_contact(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("delete_contact", data)

    def get_contact_id(self, field: Any, value: str) -> int:
        """
        Return the internal id of a contact from one of its key fields.

        Raises ClientError (kind REPLY) carrying the reply code and text
        when the reply has no id.
        """
        response = self.call(
            "get_contact_id",
            field_id=self._field_path_id(field),
            field_value=value,
        )
        data = response.data
        if isinstance(data, dict) and data.get("id") is not None:
            return int(data["id"])
        raise ClientError.from_reply(response.reply_text, response.reply_code)

    def get_contact_changes(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("get_contact_changes", data)

    def get_contact_history(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("get_contact_history", data)

    def get_contact_data(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("get_contact_data", data)

    def get_contact_registrations(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("get_contact_registrations", data)

    # --- Contact lists ---

    def get_contact_list(self, data: Mapping[str, Any] | None = None) -> ResponseEnvelope:
        return self.call("get_contact_list", data)

    def create_contact_list(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("create_contact_list", data)

    def delete_contact_list(self, list_id: str | int) -> ResponseEnvelope:
        return self.call("delete_contact_list", list_id=list_id)

    def add_contacts_to_contact_list(self, list_id: str | int, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("add_contacts_to_contact_list", data, list_id=list_id)

    def remove_contacts_from_contact_list(self, list_id: str | int, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("remove_contacts_from_contact_list", data, list_id=list_id)

    def get_contacts_from_contact_list(
        self, list_id: str | int, data: Mapping[str, Any] | None = None
    ) -> ResponseEnvelope:
        return self.call("get_contacts_from_contact_list", data, list_id=list_id)

    def check_contact_in_list(self, contact_id: int, list_id: int) -> ResponseEnvelope:
        return self.call("check_contact_in_list", list_id=list_id, contact_id=contact_id)

    # --- Emails ---

    def get_emails(
        self,
        status: int | None = None,
        contact_list: int | None = None,
        campaign_types: Iterable[str] | None = None,
    ) -> ResponseEnvelope:
        """List emails, optionally filtered by status, contact list and campaign types."""
        query: dict[str, Any] = {}
        if status is not None:
            query["status"] = int(status)
        if contact_list is not None:
            query["contactlist"] = contact_list
        types = [str(_plain(t)) for t in campaign_types or []]
        if types:
            query["campaign_type"] = ",".join(types)
        return self.call("get_emails", query=query)

    def create_email(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("create_email", data)

    def get_email(self, email_id: str | int, data: Mapping[str, Any] | None = None) -> ResponseEnvelope:
        return self.call("get_email", data, email_id=email_id)

    def launch_email(self, email_id: str | int, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("launch_email", data, email_id=email_id)

    def preview_email(self, email_id: str | int, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("preview_email", data, email_id=email_id)

    def get_email_response_summary(
        self,
        email_id: str | int,
        start_date: str | None = None,
        end_date: str | None = None,
        launch_id: str | int | None = None,
    ) -> ResponseEnvelope:
        query: dict[str, Any] = {}
        if start_date is not None:
            query["start_date"] = start_date
        if end_date is not None:
            query["end_date"] = end_date
        if launch_id is not None:
            query["launch_id"] = launch_id
        return self.call("get_email_response_summary", query=query, email_id=email_id)

    def send_email_test(self, email_id: str | int, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("send_email_test", data, email_id=email_id)

    def get_email_url(self, email_id: str | int, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("get_email_url", data, email_id=email_id)

    def get_email_delivery_status(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("get_email_delivery_status", data)

    def get_email_launches(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("get_email_launches", data)

    def get_email_responses(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("get_email_responses", data)

    def unsubscribe_email(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("unsubscribe_email", data)

    def get_email_categories(self, data: Mapping[str, Any] | None = None) -> ResponseEnvelope:
        return self.call("get_email_categories", data)

    # --- Events / exports ---

    def get_events(self) -> ResponseEnvelope:
        return self.call("get_events")

    def trigger_event(self, event_id: str | int, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("trigger_event", data, event_id=event_id)

    def get_export_status(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("get_export_status", data)

    # --- Fields ---

    def get_fields(self) -> ResponseEnvelope:
        return self.call("get_fields")

    def get_field_choices(self, field: Any) -> ResponseEnvelope:
        """Choices of a field, addressed by numeric id or mapped name."""
        return self.call("get_field_choices", field_id=self._field_path_id(field))

    def create_custom_field(self, name: str, application_type: str) -> ResponseEnvelope:
        """Create a custom field; only shorttext/longtext/largetext/date/url/numeric are allowed."""
        application_type = _plain(application_type)
        if application_type not in CREATABLE_APPLICATION_TYPES:
            if application_type in {t.value for t in ApplicationType}:
                raise ClientError.system_type_not_creatable()
            raise ClientError.type_not_creatable_via_api(application_type)
        return self.call(
            "create_custom_field",
            {"name": name, "application_type": application_type},
        )

    # --- Media / segments / folders / forms / languages ---

    def get_files(self, data: Mapping[str, Any] | None = None) -> ResponseEnvelope:
        return self.call("get_files", data)

    def upload_file(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("upload_file", data)

    def get_segments(self, data: Mapping[str, Any] | None = None) -> ResponseEnvelope:
        return self.call("get_segments", data)

    def get_folders(self, data: Mapping[str, Any] | None = None) -> ResponseEnvelope:
        return self.call("get_folders", data)

    def get_forms(self, data: Mapping[str, Any] | None = None) -> ResponseEnvelope:
        return self.call("get_forms", data)

    def get_languages(self) -> ResponseEnvelope:
        return self.call("get_languages")

    # --- Sources ---

    def get_sources(self) -> ResponseEnvelope:
        return self.call("get_sources")

    def create_source(self, data: Mapping[str, Any]) -> ResponseEnvelope:
        return self.call("create_source", data)

    def delete_source(self, source_id: str | int) -> ResponseEnvelope:
        return self.call("delete_source", source_id=source_id)

    # --- Account ---

    def add_blacklist_entries(
        self,
        emails: Iterable[str] | None = None,
        domains: Iterable[str] | None = None,
    ) -> ResponseEnvelope:
        return self.call(
            "add_blacklist_entries",
            {"emails": list(emails or []), "domains": list(domains or [])},
        )

    def get_settings(self) -> ResponseEnvelope:
        return self.call("get_settings")
