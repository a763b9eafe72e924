"""
Emarsys Endpoint Table — Logical Operation → HTTP Route

Every API operation is one row: HTTP method, path template relative to
the base URL, and whether contact field names in the body are resolved
to ids before sending. The client methods are thin wrappers over this
table.
"""
from __future__ import annotations
from pydantic import BaseModel
from typing import Any
from urllib.parse import urlencode


GET = "GET"
POST = "POST"
PUT = "PUT"
DELETE = "DELETE"


class Endpoint(BaseModel):
    name: str
    method: str
    path: str
    resolve_fields: bool = False

    def render(self, **params: Any) -> str:
        """Fill the path template, e.g. email/{email_id}/launch."""
        return self.path.format(**params)


def with_query(path: str, query: dict[str, Any]) -> str:
    """Append a urlencoded query as a trailing path segment, if any."""
    if not query:
        return path
    return f"{path}/{urlencode(query)}"


_ROWS = [
    # Conditions
    Endpoint(name="get_conditions", method=GET, path="condition"),
    # Contacts
    Endpoint(name="create_contact", method=POST, path="contact", resolve_fields=True),
    Endpoint(name="update_contact", method=PUT, path="contact", resolve_fields=True),
    Endpoint(name="update_contact_and_create_if_not_exists", method=PUT,
             path="contact/?create_if_not_exists=1", resolve_fields=True),
    Endpoint(name="delete_contact", method=POST, path="contact/delete"),
    Endpoint(name="get_contact_id", method=GET, path="contact/{field_id}={field_value}"),
    Endpoint(name="get_contact_changes", method=POST, path="contact/getchanges"),
    Endpoint(name="get_contact_history", method=POST, path="contact/getcontacthistory"),
    Endpoint(name="get_contact_data", method=POST, path="contact/getdata"),
    Endpoint(name="get_contact_registrations", method=POST, path="contact/getregistrations"),
    # Contact lists
    Endpoint(name="get_contact_list", method=GET, path="contactlist"),
    Endpoint(name="create_contact_list", method=POST, path="contactlist"),
    Endpoint(name="delete_contact_list", method=POST, path="contactlist/{list_id}/deletelist"),
    Endpoint(name="add_contacts_to_contact_list", method=POST, path="contactlist/{list_id}/add"),
    Endpoint(name="remove_contacts_from_contact_list", method=POST, path="contactlist/{list_id}/delete"),
    Endpoint(name="get_contacts_from_contact_list", method=GET, path="contactlist/{list_id}/contacts"),
    Endpoint(name="check_contact_in_list", method=GET,
             path="contactlist/{list_id}/contacts/{contact_id}"),
    # Emails
    Endpoint(name="get_emails", method=GET, path="email"),
    Endpoint(name="create_email", method=POST, path="email"),
    Endpoint(name="get_email", method=GET, path="email/{email_id}"),
    Endpoint(name="launch_email", method=POST, path="email/{email_id}/launch"),
    Endpoint(name="preview_email", method=POST, path="email/{email_id}/preview"),
    Endpoint(name="get_email_response_summary", method=GET, path="email/{email_id}/responsesummary"),
    Endpoint(name="send_email_test", method=POST, path="email/{email_id}/sendtestmail"),
    Endpoint(name="get_email_url", method=POST, path="email/{email_id}/url"),
    Endpoint(name="get_email_delivery_status", method=POST, path="email/getdeliverystatus"),
    Endpoint(name="get_email_launches", method=POST, path="email/getlaunchesofemail"),
    Endpoint(name="get_email_responses", method=POST, path="email/getresponses"),
    Endpoint(name="unsubscribe_email", method=POST, path="email/unsubscribe"),
    Endpoint(name="get_email_categories", method=GET, path="emailcategory"),
    # Events / exports
    Endpoint(name="get_events", method=GET, path="event"),
    Endpoint(name="trigger_event", method=POST, path="event/{event_id}/trigger"),
    Endpoint(name="get_export_status", method=GET, path="export"),
    # Fields
    Endpoint(name="get_fields", method=GET, path="field"),
    Endpoint(name="get_field_choices", method=GET, path="field/{field_id}/choice"),
    Endpoint(name="create_custom_field", method=POST, path="field"),
    # Media / segments / folders / forms
    Endpoint(name="get_files", method=GET, path="file"),
    Endpoint(name="upload_file", method=POST, path="file"),
    Endpoint(name="get_segments", method=GET, path="filter"),
    Endpoint(name="get_folders", method=GET, path="folder"),
    Endpoint(name="get_forms", method=GET, path="form"),
    Endpoint(name="get_languages", method=GET, path="language"),
    # Sources
    Endpoint(name="get_sources", method=GET, path="source"),
    Endpoint(name="create_source", method=POST, path="source/create"),
    Endpoint(name="delete_source", method=DELETE, path="source/{source_id}/delete"),
    # Account
    Endpoint(name="add_blacklist_entries", method=POST, path="blacklist"),
    Endpoint(name="get_settings", method=GET, path="settings"),
]

ENDPOINTS: dict[str, Endpoint] = {row.name: row for row in _ROWS}


def get_endpoint(name: str) -> Endpoint:
    """Look up an endpoint by operation name."""
    endpoint = ENDPOINTS.get(name)
    if endpoint is None:
        raise KeyError(f"Unknown endpoint: {name}")
    return endpoint
