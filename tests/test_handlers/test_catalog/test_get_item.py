import importlib
import json
import os
import unittest
from unittest.mock import MagicMock, patch

from common.models.bookings import BookingType
from common.models.catalog import CatalogItem
from common.utils.custom_exceptions import NotFoundException


class GetItemDetailsTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.env = patch.dict(os.environ, {"TABLE_NAME": "test-table"}, clear=False)
        cls.env.start()
        cls.resource = patch("boto3.resource")
        mock_res = cls.resource.start()
        mock_res.return_value.Table.return_value = MagicMock()
        import handlers.catalog.get_item as mod
        cls.mod = importlib.reload(mod)

    @classmethod
    def tearDownClass(cls):
        cls.resource.stop()
        cls.env.stop()

    def setUp(self):
        self.p_get = patch.object(self.mod.booking_service, "get_item_details")
        self.mock_get = self.p_get.start()

    def tearDown(self):
        self.p_get.stop()

    def _event(self, item_type="place", item_id="p1"):
        return {"pathParameters": {"type": item_type, "id": item_id}}

    def test_missing_params_returns_400(self):
        self.assertEqual(400, self.mod.get_item_details({}, None)["statusCode"])

    def test_invalid_type_returns_400(self):
        resp = self.mod.get_item_details(self._event(item_type="flight"), None)
        self.assertEqual(400, resp["statusCode"])
        self.assertIn("'place'", json.loads(resp["body"])["error"])

    def test_returns_item(self):
        self.mock_get.return_value = CatalogItem(
            item_id="p1", type=BookingType.PLACE, price=1000.0, title="Villa", address="Goa"
        )

        resp = self.mod.get_item_details(self._event(), None)

        item = json.loads(resp["body"])["item"]
        self.assertEqual(200, resp["statusCode"])
        self.assertEqual({"id": "p1", "type": "place", "title": "Villa", "price": 1000.0, "address": "Goa"}, item)
        self.mock_get.assert_called_once_with(BookingType.PLACE, "p1")

    def test_not_found_returns_404(self):
        self.mock_get.side_effect = NotFoundException("experience", "e1", 404)
        resp = self.mod.get_item_details(self._event(item_type="experience", item_id="e1"), None)
        self.assertEqual(404, resp["statusCode"])


if __name__ == "__main__":
    unittest.main()
