import threading
import time
import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import requests

from td_device_probe.services.timedoctor_client import (
    TimeDoctorAuthError,
    TimeDoctorClient,
    TimeDoctorConfigError,
    TimeDoctorError,
)

def make_response(status_code=200, payload=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    return resp

LOGIN_OK = {
    "data": {
        "token": "tok-1",
        "expiresAt": "2099-01-01T00:00:00.000Z",
        "companies": [
            {"id": "other", "name": "Other Co"},
            {"id": "c-42", "name": "Acme"},
        ],
    }
}

class TestTimeDoctorClient(unittest.TestCase):
    def setUp(self):
        self.client = TimeDoctorClient("ops@example.com", "secret", "Acme", base_url="https://td.test/")
        self.client.session = MagicMock()

    def test_login_resolves_company(self):
        self.client.session.post.return_value = make_response(payload=LOGIN_OK)

        self.assertEqual(self.client.get_company_id(), "c-42")
        self.assertEqual(self.client.token, "tok-1")
        self.assertEqual(self.client.token_expiry.year, 2099)

        url = self.client.session.post.call_args.args[0]
        self.assertEqual(url, "https://td.test/api/1.0/authorization/login")
        body = self.client.session.post.call_args.kwargs["json"]
        self.assertEqual(body["permissions"], "write")
        self.assertNotIn("totpCode", body)

    def test_token_reused_until_expiry(self):
        self.client.session.post.return_value = make_response(payload=LOGIN_OK)
        self.client.get_company_id()
        self.client.get_company_id()
        self.assertEqual(self.client.session.post.call_count, 1)

        self.client.token_expiry = datetime.now(timezone.utc) + timedelta(minutes=2)
        self.client.get_company_id()
        self.assertEqual(self.client.session.post.call_count, 2)

    def test_concurrent_callers_share_one_login(self):
        def slow_login(*args, **kwargs):
            time.sleep(0.05)
            return make_response(payload=LOGIN_OK)

        self.client.session.post.side_effect = slow_login
        seen = []
        workers = [
            threading.Thread(target=lambda: seen.append(self.client.get_company_id()))
            for _ in range(5)
        ]
        for w in workers:
            w.start()
        for w in workers:
            w.join()

        self.assertEqual(seen, ["c-42"] * 5)
        self.assertEqual(self.client.session.post.call_count, 1)

    def test_company_keyed_by_name(self):
        payload = {"data": {"token": "t", "companies": {"Acme": {"id": "c-7"}}}}
        self.client.session.post.return_value = make_response(payload=payload)
        self.assertEqual(self.client.get_company_id(), "c-7")

    def test_unknown_company(self):
        payload = {"data": {"token": "t", "companies": [{"id": "x", "name": "Other Co"}]}}
        self.client.session.post.return_value = make_response(payload=payload)
        with self.assertRaises(TimeDoctorAuthError) as ctx:
            self.client.get_company_id()
        self.assertIn("Acme", str(ctx.exception))
        self.assertIsNone(self.client.token)

    def test_login_rejected(self):
        self.client.session.post.return_value = make_response(401, {"message": "bad password"})
        with self.assertRaises(TimeDoctorAuthError) as ctx:
            self.client.login()
        self.assertEqual(str(ctx.exception), "Invalid credentials")

        self.client.session.post.return_value = make_response(403, {"message": "locked"})
        with self.assertRaisesRegex(TimeDoctorAuthError, "Authentication denied: locked"):
            self.client.login()

    def test_login_without_token(self):
        self.client.session.post.return_value = make_response(payload={"data": {}})
        with self.assertRaisesRegex(TimeDoctorAuthError, "No token"):
            self.client.login()

    def test_missing_configuration(self):
        client = TimeDoctorClient("", "", "Acme")
        with self.assertRaises(TimeDoctorConfigError) as ctx:
            client.login()
        self.assertEqual(str(ctx.exception), "Missing required configuration: TD_EMAIL, TD_PASSWORD")

    def test_request_returns_json(self):
        self.client.session.post.return_value = make_response(payload=LOGIN_OK)
        self.client.session.request.return_value = make_response(payload={"data": [1]})

        result = self.client.request("/api/1.0/users?company={companyId}")

        self.assertEqual(result, {"data": [1]})
        args = self.client.session.request.call_args
        self.assertEqual(args.args, ("GET", "https://td.test/api/1.0/users?company=c-42"))
        self.assertEqual(args.kwargs["headers"]["Authorization"], "JWT tok-1")

    def test_request_http_error(self):
        self.client.session.post.return_value = make_response(payload=LOGIN_OK)
        self.client.session.request.return_value = make_response(404, text="Not Found")
        with self.assertRaises(TimeDoctorError) as ctx:
            self.client.request("/api/1.0/users/u1/device")
        self.assertEqual(str(ctx.exception), "API Error 404: Not Found")

    def test_request_transport_and_decode_errors(self):
        self.client.session.post.return_value = make_response(payload=LOGIN_OK)

        self.client.session.request.side_effect = requests.Timeout("read timed out")
        with self.assertRaisesRegex(TimeDoctorError, "read timed out"):
            self.client.request("/api/1.0/users/u1")

        self.client.session.request.side_effect = None
        self.client.session.request.return_value = make_response(payload=ValueError("bad json"), text="<html>")
        with self.assertRaisesRegex(TimeDoctorError, "Malformed JSON"):
            self.client.request("/api/1.0/users/u1")

if __name__ == "__main__":
    unittest.main()
