"""Tests for field enrichment."""

from tools.field_enricher import STANDARD_FIELDS, FieldEnricher, LogContext

from .conftest import FakeBrowser, FakeSession


def _enricher(context=None, session=None, browser=None):
    return FieldEnricher(context or LogContext(environment="prod"), session or FakeSession(), browser or FakeBrowser())


class TestFieldEnricher:
    def test_standard_fields_always_present(self):
        fields = _enricher().enrich()
        assert list(fields) == list(STANDARD_FIELDS)
        assert fields == {
            "environment": "prod",
            "userId": None,
            "browser": "Firefox 128",
            "sessionId": "session-1",
        }

    def test_call_fields_are_merged_and_nothing_else_added(self):
        fields = _enricher().enrich({"requestPath": "/api/x", "correlationId": "corr-1"})
        assert set(fields) == set(STANDARD_FIELDS) | {"requestPath", "correlationId"}
        assert fields["requestPath"] == "/api/x"

    def test_call_fields_win_on_collision(self):
        fields = _enricher().enrich({"environment": "override"})
        assert fields["environment"] == "override"

    def test_browser_resolved_once(self):
        browser = FakeBrowser()
        enricher = _enricher(browser=browser)
        enricher.enrich()
        enricher.enrich()
        assert browser.calls == 1

    def test_session_read_on_every_call(self):
        session = FakeSession("s-1")
        enricher = _enricher(session=session)
        assert enricher.enrich()["sessionId"] == "s-1"
        session.session_id = "s-2"
        assert enricher.enrich()["sessionId"] == "s-2"

    def test_context_changes_are_visible(self):
        context = LogContext(environment="prod")
        enricher = _enricher(context=context)
        context.user_id = "u-7"
        assert enricher.enrich()["userId"] == "u-7"

    def test_empty_browser_identity_falls_back(self):
        assert _enricher(browser=FakeBrowser("")).browser == "Unknown browser"

    def test_values_pass_through_unvalidated(self):
        fields = _enricher().enrich({"elapsedTime": -1, "url": None})
        assert fields["elapsedTime"] == -1
        assert fields["url"] is None


class TestDefaultCollaborators:
    def test_platform_identity_names_the_runtime(self):
        import platform

        from tools.collaborators import PlatformBrowserIdentity
        identity = PlatformBrowserIdentity().get_vendor_and_version()
        assert identity.startswith(platform.python_implementation())

    def test_session_rotation_changes_id(self):
        from tools.collaborators import UuidSessionProvider
        provider = UuidSessionProvider()
        first = provider.session_id
        assert provider.rotate() == provider.session_id != first

    def test_explicit_session_id(self):
        from tools.collaborators import UuidSessionProvider
        assert UuidSessionProvider("fixed").session_id == "fixed"
