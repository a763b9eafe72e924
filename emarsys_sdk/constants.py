"""
Emarsys API constants.

Reply codes, email/launch status codes, campaign types and field
application types as documented by the Emarsys v2 API.
"""
from __future__ import annotations
from enum import Enum, IntEnum

LIVE_BASE_URL = "https://api.emarsys.net/api/v2/"

# Field names that bypass the mapping table entirely
SYSTEM_FIELDS: frozenset[str] = frozenset({"key_id", "id", "contacts", "uid"})

class ReplyCode(IntEnum):
    OK = 0
    INTERNAL_ERROR = 1
    INVALID_KEY_FIELD = 2004
    MISSING_KEY_FIELD = 2005
    CONTACT_NOT_FOUND = 2008
    NON_UNIQUE_RESULT = 2010
    INVALID_STATUS = 6003
    INVALID_DATA = 10001

class EmailStatus(IntEnum):
    ABORTED = -6
    PAUSED_ABORTED = -4
    LAUNCHED_PAUSED = -3
    TESTED_PAUSED = -2
    IN_DESIGN = 1
    TESTED = 2
    LAUNCHED = 3
    READY_TO_LAUNCH = 4
    NOT_LAUNCHED = 5


class CampaignType(str, Enum):
    ADHOC = "adhoc"
    RECURRING = "recurring"
    NEWSLETTER = "newsletter"
    ON_EVENT = "onevent"
    TEST_EMAIL = "testemail"
    MULTILANGUAGE = "multilanguage"
    BROADCAST = "broadcast"

class ApplicationType(str, Enum):
    """Field application types. Only the first six can be created via API."""
    SHORTTEXT = "shorttext"
    LONGTEXT = "longtext"
    LARGETEXT = "largetext"
    DATE = "date"
    URL = "url"
    NUMERIC = "numeric"
    # System types
    INTERESTS = "interests"
    EMAIL = "email"
    BIRTHDATE = "birthdate"
    SINGLECHOICE = "singlechoice"
    MULTICHOICE = "multichoice"
    SPECIAL = "special"
    NUMBER = "number"

CREATABLE_APPLICATION_TYPES: frozenset[str] = frozenset({
    ApplicationType.SHORTTEXT.value,
    ApplicationType.LONGTEXT.value,
    ApplicationType.LARGETEXT.value,
    ApplicationType.DATE.value,
    ApplicationType.URL.value,
    ApplicationType.NUMERIC.value,
})
