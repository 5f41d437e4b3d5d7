from dataclasses import dataclass
from typing import Mapping, Optional

from schemas.log_schemas import FieldSet, FieldValue
from tools.collaborators import UNKNOWN_BROWSER, BrowserIdentity, SessionProvider

STANDARD_FIELDS = ("environment", "userId", "browser", "sessionId")


@dataclass
class LogContext:
    """Process-wide values written by the pipeline's setters and read on every record."""
    environment: Optional[str] = None
    user_id: Optional[str] = None


class FieldEnricher:
    """
    Builds the field map for a record: the four standard fields followed by
    any call-specific fields, which take precedence on a name clash.
    """

    def __init__(self, context: LogContext, session_provider: SessionProvider, browser_identity: BrowserIdentity):
        self.context = context
        self.session_provider = session_provider
        # Resolved once; the client identity does not change during a process.
        self.browser = browser_identity.get_vendor_and_version() or UNKNOWN_BROWSER

    def standard_fields(self) -> FieldSet:
        return {
            "environment": self.context.environment,
            "userId": self.context.user_id,
            "browser": self.browser,
            "sessionId": self.session_provider.session_id,
        }

    def enrich(self, call_fields: Optional[Mapping[str, FieldValue]] = None) -> FieldSet:
        fields = self.standard_fields()
        if call_fields:
            fields.update(call_fields)
        return fields
