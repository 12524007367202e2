import unittest

from common.utils.identity import get_requester_id


def _event(authorizer):
    return {"requestContext": {"authorizer": authorizer}}


class TestGetRequesterId(unittest.TestCase):

    def test_authorized_user(self):
        event = _event({"principalId": "u1", "user_id": "u1", "email": "a@example.com"})

        self.assertEqual(get_requester_id(event), "u1")

    def test_guest_principal_has_no_identity(self):
        self.assertIsNone(get_requester_id(_event({"principalId": "guest"})))

    def test_empty_user_id_is_guest(self):
        self.assertIsNone(get_requester_id(_event({"user_id": ""})))

    def test_event_without_request_context(self):
        self.assertIsNone(get_requester_id({}))
        self.assertIsNone(get_requester_id({"requestContext": None}))


if __name__ == "__main__":
    unittest.main()
