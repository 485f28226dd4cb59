import json

import pytest
import requests
from requests.auth import HTTPDigestAuth

from swimport.config import ShopwareSettings
from swimport.errors import RemoteError, RemoteNotFound
from swimport.shopware.client import ShopwareApi


def _response(status: int, payload=None, raw: bytes = None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    if raw is not None:
        resp._content = raw
    elif payload is not None:
        resp._content = json.dumps(payload).encode("utf-8")
    else:
        resp._content = b""
    resp.encoding = "utf-8"
    return resp


class FakeSession(requests.Session):
    """Records requests and replays queued responses (or raises queued exceptions)."""

    def __init__(self, *replies):
        super().__init__()
        self.replies = list(replies)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def _api(*replies):
    session = FakeSession(*replies)
    settings = ShopwareSettings("https://shop.example/", "api", "secret", timeout=3)
    return ShopwareApi(settings, session=session), session


def test_session_is_configured():
    api, session = _api()
    assert isinstance(session.auth, HTTPDigestAuth)
    assert session.auth.username == "api"
    assert session.headers["Accept"] == "application/json"


def test_find_customer_sends_email_filter():
    api, session = _api(_response(200, {"data": [{"id": 17, "email": "a@b.com"}], "total": 1}))
    assert api.find_customer_id_by_email("a@b.com") == 17

    method, url, kwargs = session.calls[0]
    assert method == "GET"
    assert url == "https://shop.example/api/customers"
    assert kwargs["params"] == {
        "filter[0][property]": "email",
        "filter[0][expression]": "=",
        "filter[0][value]": "a@b.com",
    }
    assert kwargs["timeout"] == 3.0


def test_find_customer_first_match_wins():
    api, _ = _api(_response(200, {"data": [{"id": 4}, {"id": 9}]}))
    assert api.find_customer_id_by_email("a@b.com") == 4


def test_find_customer_no_match():
    api, _ = _api(_response(200, {"data": [], "total": 0}))
    assert api.find_customer_id_by_email("a@b.com") is None


def test_404_is_distinguishable():
    api, _ = _api(_response(404, {"success": False, "message": "not found"}))
    with pytest.raises(RemoteNotFound) as exc:
        api.find_customer_id_by_email("a@b.com")
    assert exc.value.status_code == 404


def test_server_error_is_remote_error():
    api, _ = _api(_response(500, raw=b"boom"))
    with pytest.raises(RemoteError) as exc:
        api.update_customer(1, {"email": "a@b.com"})
    assert not isinstance(exc.value, RemoteNotFound)
    assert exc.value.status_code == 500
    assert "boom" in str(exc.value)


def test_transport_error_is_remote_error():
    api, _ = _api(requests.ConnectionError("refused"))
    with pytest.raises(RemoteError, match="refused"):
        api.create_customer({"email": "a@b.com"})


def test_non_json_body_is_remote_error():
    api, _ = _api(_response(200, raw=b"<html>maintenance</html>"))
    with pytest.raises(RemoteError, match="not JSON"):
        api.find_customer_id_by_email("a@b.com")


def test_create_customer_returns_id():
    api, session = _api(_response(201, {"success": True, "data": {"id": 55, "location": "x"}}))
    assert api.create_customer({"email": "a@b.com"}) == 55
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", "https://shop.example/api/customers")
    assert kwargs["json"] == {"email": "a@b.com"}


def test_update_customer_puts_to_resource():
    api, session = _api(_response(200, {"success": True}))
    api.update_customer(55, {"email": "a@b.com"})
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("PUT", "https://shop.example/api/customers/55")


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"id": 8}, 8),
        ({"success": True, "data": {"id": 9}}, 9),
        ({"success": True}, None),
    ],
)
def test_create_order(payload, expected):
    api, session = _api(_response(201, payload))
    assert api.create_order({"customerId": 1}) == expected
    assert session.calls[0][1] == "https://shop.example/api/orders"


def test_empty_body_is_ok():
    api, _ = _api(_response(204))
    api.update_customer(1, {})
