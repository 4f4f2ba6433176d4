import logging
import uuid

from gadget_tracker.logging import resolve_level


class TestLogLevel:

    def test_known_levels(self):
        assert resolve_level("debug") == logging.DEBUG
        assert resolve_level("WARNING") == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        assert resolve_level("chatty") == logging.INFO
        assert resolve_level("") == logging.INFO
        assert resolve_level("basicConfig") == logging.INFO


class TestRequestId:

    def test_generated_when_absent(self, client):
        res = client.get("/assets")
        assert res.status_code == 200
        uuid.UUID(res.headers["X-Request-ID"])

    def test_blank_header_is_replaced(self, client):
        res = client.get("/health", headers={"X-Request-ID": ""})
        uuid.UUID(res.headers["X-Request-ID"])

    def test_error_responses_keep_request_id(self, client):
        res = client.get("/users/999", headers={"X-Request-ID": "trace-42"})
        assert res.status_code == 404
        assert res.headers["X-Request-ID"] == "trace-42"
