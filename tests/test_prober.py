import unittest
from datetime import date
from unittest.mock import patch

from td_device_probe.services.candidates import CandidateEndpoint, exploration_endpoints, priority_endpoints
from td_device_probe.services.prober import probe_endpoints
from td_device_probe.services.timedoctor_client import TimeDoctorError

from fakes import FakeTimeDoctor

class TestProbeEndpoints(unittest.TestCase):
    def setUp(self):
        self.candidates = [
            CandidateEndpoint("a", "/a?x=1"),
            CandidateEndpoint("b", "/b"),
            CandidateEndpoint("c", "/c"),
            CandidateEndpoint("d", "/d"),
        ]

    @patch("td_device_probe.services.prober.time.sleep")
    def test_one_outcome_per_candidate_in_order(self, sleep):
        client = FakeTimeDoctor({
            "/a": {"ok": 1},
            "/b": TimeDoctorError("API Error 500: boom"),
            "/c": None,
            "/d": RuntimeError("socket closed"),
        })
        outcomes = probe_endpoints(client, self.candidates, delay=0.1)

        self.assertEqual([o.key for o in outcomes], ["a", "b", "c", "d"])
        self.assertEqual([o.ok for o in outcomes], [True, False, True, False])
        self.assertEqual(outcomes[0].data, {"ok": 1})
        self.assertEqual(outcomes[1].error, "API Error 500: boom")
        self.assertEqual(outcomes[3].error, "socket closed")
        self.assertEqual(client.calls, ["/a?x=1", "/b", "/c", "/d"])
        self.assertEqual(sleep.call_count, 4)
        sleep.assert_called_with(0.1)

    @patch("td_device_probe.services.prober.time.sleep")
    def test_all_failures_still_complete(self, sleep):
        outcomes = probe_endpoints(FakeTimeDoctor(), self.candidates, delay=0)
        self.assertEqual(len(outcomes), 4)
        self.assertFalse(any(o.ok for o in outcomes))
        sleep.assert_not_called()

    @patch("td_device_probe.services.prober.time.sleep")
    def test_unserialisable_payload_recorded_once(self, sleep):
        looped = {"name": "x"}
        looped["self"] = looped
        client = FakeTimeDoctor({"/a": looped, "/b": {"ok": 1}})

        outcomes = probe_endpoints(client, self.candidates[:2], delay=0)

        self.assertEqual([(o.key, o.ok) for o in outcomes], [("a", True), ("b", True)])
        self.assertIs(outcomes[0].data, looped)
        self.assertIsNone(outcomes[0].error)

class TestCandidates(unittest.TestCase):
    def test_exploration_list(self):
        endpoints = exploration_endpoints("u1", "c9", today=date(2025, 10, 8))
        self.assertEqual(len(endpoints), 20)
        self.assertEqual(len({e.key for e in endpoints}), 20)
        self.assertEqual(endpoints[0].endpoint, "/api/1.0/users/u1")
        by_key = {e.key: e.endpoint for e in endpoints}
        self.assertEqual(
            by_key["screenshots"],
            "/api/1.0/screenshots?user=u1&company=c9&from=2025-10-05&to=2025-10-08&limit=5",
        )
        self.assertEqual(
            by_key["activity_sessions"],
            "/api/1.0/activity/sessions?user=u1&company=c9&from=2025-10-01&to=2025-10-08",
        )

    def test_priority_list(self):
        endpoints = priority_endpoints("u1", "c9", today=date(2025, 10, 8))
        self.assertEqual([e.key for e in endpoints], ["user", "screenshots", "worklog", "timeuse"])
        self.assertTrue(endpoints[2].endpoint.endswith("from=2025-10-01&to=2025-10-08&limit=50"))
        self.assertTrue(endpoints[3].endpoint.endswith("from=2025-10-05&to=2025-10-08&limit=20"))
        self.assertEqual(endpoints[0].description, "Basic user info")

    def test_user_id_is_escaped(self):
        endpoints = priority_endpoints("a/b c", "c9")
        self.assertEqual(endpoints[0].endpoint, "/api/1.0/users/a%2Fb%20c")

if __name__ == "__main__":
    unittest.main()
