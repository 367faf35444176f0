import json

from django.contrib.auth.models import User
from django.test import SimpleTestCase, TestCase, override_settings
from django.utils import timezone

from .formatting import log_details, pretty_json
from .models import RequestLog
from .nonce import create_nonce, verify_nonce
from .views import GET_LOG_DETAILS


class PrettyJsonTests(SimpleTestCase):

    def test_reindents_valid_json(self):
        self.assertEqual(pretty_json('{"a":1,"b":[1,2]}'), '{\n  "a": 1,\n  "b": [\n    1,\n    2\n  ]\n}')

    def test_malformed_json_shown_verbatim(self):
        self.assertEqual(pretty_json("{not json"), "{not json")

    def test_empty_value(self):
        self.assertEqual(pretty_json(""), "No data")
        self.assertEqual(pretty_json(None), "No data")


class NonceTests(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(username="admin", password="x", is_staff=True)
        self.other = User.objects.create_user(username="other", password="x", is_staff=True)

    def test_nonce_bound_to_user_and_action(self):
        nonce = create_nonce(GET_LOG_DETAILS, self.user)
        self.assertTrue(verify_nonce(nonce, GET_LOG_DETAILS, self.user))
        self.assertFalse(verify_nonce(nonce, GET_LOG_DETAILS, self.other))
        self.assertFalse(verify_nonce(nonce, "some_other_action", self.user))
        self.assertFalse(verify_nonce("garbage", GET_LOG_DETAILS, self.user))
        self.assertFalse(verify_nonce("", GET_LOG_DETAILS, self.user))

    def test_expired_nonce(self):
        nonce = create_nonce(GET_LOG_DETAILS, self.user)
        self.assertFalse(verify_nonce(nonce, GET_LOG_DETAILS, self.user, max_age=-1))


class LogDetailsEndpointTests(TestCase):
    url = "/admin-ajax/"

    def setUp(self):
        self.staff = User.objects.create_user(username="admin", password="testpass123", is_staff=True)
        self.shopper = User.objects.create_user(username="shopper", password="testpass123")
        self.log = RequestLog.objects.create(
            ip_address="203.0.113.7",
            status="success",
            processed_at=timezone.now(),
            request_body="payment_method=paypal",
            request_params='{"currency":["EUR"]}',
            request_headers="{broken",
            response_data="",
        )

    def post(self, user=None, **data):
        if user is not None:
            self.client.force_login(user)
            data.setdefault("nonce", create_nonce(GET_LOG_DETAILS, user))
        data.setdefault("action", GET_LOG_DETAILS)
        return self.client.post(self.url, data)

    def test_success_envelope(self):
        resp = self.post(self.staff, log_id=self.log.id)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["success"])

        data = body["data"]
        for key in ("id", "ip_address", "status", "created_at", "processed_at",
                    "request_body", "request_params", "request_headers", "response_data"):
            self.assertIn(key, data)
        self.assertEqual(data["id"], self.log.id)
        self.assertEqual(data["request_params"], '{"currency":["EUR"]}')
        self.assertEqual(data["display"]["request_params"], json.dumps({"currency": ["EUR"]}, indent=2))
        self.assertEqual(data["display"]["request_headers"], "{broken")
        self.assertEqual(data["display"]["response_data"], "No data")

    def test_unknown_log(self):
        resp = self.post(self.staff, log_id=999999)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"success": False, "data": "Log not found"})

    def test_invalid_log_id(self):
        resp = self.post(self.staff, log_id="abc")
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["success"])

    def test_bad_nonce(self):
        resp = self.post(self.staff, log_id=self.log.id, nonce="nope")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"success": False, "data": "Security check failed"})

    def test_non_staff_rejected(self):
        resp = self.post(self.shopper, log_id=self.log.id)
        self.assertEqual(resp.status_code, 403)
        self.assertFalse(resp.json()["success"])

    def test_anonymous_rejected(self):
        resp = self.post(log_id=self.log.id, nonce="x")
        self.assertEqual(resp.status_code, 403)

    def test_unknown_action(self):
        resp = self.post(self.staff, action="delete_everything", log_id=self.log.id)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["data"], "Invalid action")

    def test_get_not_allowed(self):
        self.assertEqual(self.client.get(self.url).status_code, 405)

    def test_issue_nonce(self):
        self.client.force_login(self.staff)
        resp = self.client.get("/admin-ajax/nonce/", {"action": GET_LOG_DETAILS})
        nonce = resp.json()["data"]["nonce"]
        self.assertTrue(verify_nonce(nonce, GET_LOG_DETAILS, self.staff))


class LogDetailsFormattingTests(TestCase):

    def test_processed_at_missing(self):
        log = RequestLog.objects.create(status="pending")
        data = log_details(log)
        self.assertIsNone(data["processed_at"])
        self.assertEqual(data["display"]["processed_at"], "N/A")
        self.assertEqual(data["display"]["request_body"], "No data")


@override_settings(REQUEST_LOG_PATHS=["/shop/checkout/"])
class RequestLogMiddlewareTests(TestCase):

    def test_checkout_request_recorded(self):
        resp = self.client.get("/shop/checkout/?currency=USD", HTTP_USER_AGENT="tests", HTTP_COOKIE="a=b")
        self.assertEqual(resp.status_code, 200)

        log = RequestLog.objects.get()
        self.assertEqual(log.status, "success")
        self.assertIsNotNone(log.processed_at)
        self.assertEqual(json.loads(log.request_params), {"currency": ["USD"]})
        headers = json.loads(log.request_headers)
        self.assertEqual(headers["User-Agent"], "tests")
        self.assertNotIn("Cookie", headers)
        self.assertIn("gateways", json.loads(log.response_data))

    def test_failed_request_marked_failed(self):
        self.client.post("/shop/checkout/", data={"payment_method": "nope"}, content_type="application/json")
        self.assertEqual(RequestLog.objects.get().status, "failed")

    def test_other_paths_not_recorded(self):
        self.client.get("/shop/gateways/")
        self.assertFalse(RequestLog.objects.exists())
