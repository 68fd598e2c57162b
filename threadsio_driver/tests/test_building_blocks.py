"""
Tests for the pieces the client is assembled from.

Tests:
- Wire timestamp formatting
- Request descriptors
- Response wrapper
- Transports
"""

import json
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import requests

from threadsio_driver import (
    MockTransport,
    RequestDescriptor,
    RequestsTransport,
    Response,
    build_request,
    format_date,
)
from threadsio_driver.dates import utcnow


class TestFormatDate:
    """Test wire timestamp formatting."""

    def test_utc_datetime(self, fixed_time):
        assert format_date(fixed_time) == "2016-03-01T14:05:09.000Z"

    def test_suffix_replaces_offset(self, fixed_time):
        formatted = format_date(fixed_time)

        assert formatted.endswith(".000Z")
        assert "+00:00" not in formatted

    def test_microseconds_dropped(self):
        value = datetime(2016, 3, 1, 14, 5, 9, 987654, tzinfo=timezone.utc)
        assert format_date(value) == "2016-03-01T14:05:09.000Z"

    def test_negative_offset_crosses_midnight(self):
        new_york = timezone(timedelta(hours=-5))
        value = datetime(2016, 3, 1, 22, 30, 0, tzinfo=new_york)

        assert format_date(value) == "2016-03-02T03:30:00.000Z"

    def test_round_trip(self):
        """Test parsing the wire string gives back the same instant."""
        value = datetime(2020, 2, 29, 23, 59, 59, tzinfo=timezone(timedelta(hours=3)))
        parsed = datetime.fromisoformat(format_date(value).replace(".000Z", "+00:00"))

        assert parsed == value

    def test_naive_datetime_rejected(self):
        with pytest.raises(ValueError):
            format_date(datetime(2016, 3, 1, 14, 5, 9))

    def test_utcnow_is_aware(self):
        now = utcnow()
        assert now.tzinfo is not None
        assert now.utcoffset() == timedelta(0)


class TestBuildRequest:
    """Test request descriptors."""

    def test_defaults_to_post(self):
        request = build_request("identify", {"userId": "u1"})

        assert isinstance(request, RequestDescriptor)
        assert request.method == "POST"
        assert request.action == "identify"

    def test_params_wrapped_as_json_body(self):
        request = build_request("track", {"userId": "u1", "event": "Connected"})

        assert request.params == {"json": {"userId": "u1", "event": "Connected"}}
        assert request.payload == {"userId": "u1", "event": "Connected"}

    def test_params_copied(self):
        params = {"userId": "u1"}
        request = build_request("remove", params)
        params["userId"] = "changed"

        assert request.payload == {"userId": "u1"}

    def test_descriptor_is_frozen(self):
        request = build_request("remove", {})

        with pytest.raises(AttributeError):
            request.action = "track"

    def test_no_params(self):
        assert build_request("remove").payload == {}


class TestResponse:
    """Test the Response wrapper."""

    def test_from_text(self):
        response = Response('{"success": true, "id": "abc"}')

        assert response.success is True
        assert response["id"] == "abc"
        assert response.get("missing", "default") == "default"
        assert "id" in response

    def test_from_bytes(self):
        response = Response(b'{"success": false}')

        assert response.success is False
        assert response.raw == '{"success": false}'

    def test_missing_success_is_false(self):
        assert Response("{}").success is False

    def test_data_is_read_only(self):
        response = Response(json.dumps({"success": True}))

        with pytest.raises(TypeError):
            response.data["success"] = False

    def test_invalid_json(self):
        with pytest.raises(ValueError):
            Response("not json")

    def test_non_object_json(self):
        with pytest.raises(ValueError):
            Response("[1, 2, 3]")


class TestRequestsTransport:
    """Test the requests-backed transport."""

    def test_session_setup(self):
        transport = RequestsTransport("https://input.threads.io/v1/", ("key", ""))

        assert transport.session.auth == ("key", "")
        assert "User-Agent" in transport.session.headers

    def test_base_url_gets_trailing_slash(self):
        transport = RequestsTransport("http://localhost:8080/v1", ("key", ""))

        assert transport.url_for(build_request("track")) == "http://localhost:8080/v1/track"

    def test_send_passes_json_and_timeout(self, http_response):
        session = MagicMock()
        session.request.return_value = http_response(200, {"success": True})
        transport = RequestsTransport(
            "https://input.threads.io/v1/", ("key", ""), timeout=5, session=session
        )

        body = transport.send(build_request("track", {"userId": "u1"}))

        assert json.loads(body) == {"success": True}
        session.request.assert_called_once_with(
            "POST",
            "https://input.threads.io/v1/track",
            timeout=5,
            json={"userId": "u1"},
        )

    def test_send_raises_http_error(self, http_response):
        session = MagicMock()
        session.request.return_value = http_response(400, {"error": "bad"})
        transport = RequestsTransport("https://input.threads.io/v1/", ("key", ""), session=session)

        with pytest.raises(requests.HTTPError):
            transport.send(build_request("track"))

    def test_close(self):
        session = MagicMock()
        transport = RequestsTransport("https://input.threads.io/v1/", ("key", ""), session=session)

        transport.close()

        session.close.assert_called_once()


class TestMockTransport:
    """Test the offline transport."""

    def test_returns_success_body(self):
        transport = MockTransport()

        assert Response(transport.send(build_request("identify"))).success is True

    def test_records_requests(self):
        transport = MockTransport()
        request = build_request("page", {"name": "Welcome Page"})

        transport.send(request)

        assert transport.requests == [request]
