from django.test import TestCase

from .models import Option
from .options import get_option, update_option


class OptionStoreTests(TestCase):

    def test_get_absent_returns_default_copy(self):
        default = {"rules": []}
        value = get_option("missing", default)
        self.assertEqual(value, default)
        value["rules"].append("x")
        self.assertEqual(default, {"rules": []})

    def test_update_creates_then_replaces(self):
        self.assertTrue(update_option("k", {"a": 1, "b": 2}))
        self.assertTrue(update_option("k", {"a": 3}))
        self.assertEqual(get_option("k"), {"a": 3})
        self.assertEqual(Option.objects.filter(key="k").count(), 1)

    def test_update_same_value_reports_unchanged(self):
        update_option("k", {"a": 1})
        self.assertFalse(update_option("k", {"a": 1}))
