import unittest

from lokigw.utils.upsert import find, flag_value, rewrite_flag, upsert, upsert_flag


class UpsertTests(unittest.TestCase):
    def test_upsert_appends_new_entries(self) -> None:
        items = [{"name": "a", "v": 1}]
        upsert(items, {"name": "b", "v": 2})
        self.assertEqual(items, [{"name": "a", "v": 1}, {"name": "b", "v": 2}])

    def test_upsert_replaces_in_place(self) -> None:
        items = [{"name": "a", "v": 1}, {"name": "b", "v": 2}]
        upsert(items, {"name": "a", "v": 3})
        self.assertEqual(items, [{"name": "a", "v": 3}, {"name": "b", "v": 2}])

    def test_upsert_with_custom_key_and_merge(self) -> None:
        items = [{"port": "metrics", "keep": True, "v": 1}]
        upsert(
            items,
            {"port": "metrics", "v": 2},
            key="port",
            merge=lambda old, new: {**old, **new},
        )
        self.assertEqual(items, [{"port": "metrics", "keep": True, "v": 2}])

    def test_find(self) -> None:
        items = [{"name": "a", "mountPath": "/x"}]
        self.assertIs(find(items, "/x", key="mountPath"), items[0])
        self.assertIsNone(find(items, "b"))
        self.assertIsNone(find(None, "a"))

    def test_flags(self) -> None:
        args = ["--a=1", "--ab=2"]
        upsert_flag(args, "--a", "3")
        upsert_flag(args, "--c", "4")
        self.assertEqual(args, ["--a=3", "--ab=2", "--c=4"])
        self.assertEqual(flag_value(args, "--ab"), "2")
        self.assertIsNone(flag_value(args, "--missing"))

        rewrite_flag(args, "--ab", lambda v: v * 2)
        rewrite_flag(args, "--missing", lambda v: "never")
        self.assertEqual(args, ["--a=3", "--ab=22", "--c=4"])


if __name__ == "__main__":
    unittest.main()
