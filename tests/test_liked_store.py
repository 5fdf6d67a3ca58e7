"""Tests for the liked-paper store and its JSON file."""

import json

from kigaers.feed.liked import STORAGE_KEY, LikedPaperStore
from kigaers.schemas.paper import make_end_of_feed_card


class TestLikedPaperStore:
    def test_add_is_idempotent(self, make_paper):
        store = LikedPaperStore()
        paper = make_paper()

        assert store.add(paper) is True
        assert store.add(paper) is False
        assert len(store) == 1

    def test_placeholder_is_never_stored(self):
        store = LikedPaperStore()
        assert store.add(make_end_of_feed_card("x")) is False
        assert store.list() == []

    def test_keeps_insertion_order(self, make_paper):
        store = LikedPaperStore()
        for paper_id in ["b", "a", "c"]:
            store.add(make_paper(paper_id))
        assert [p.id for p in store.list()] == ["b", "a", "c"]

    def test_remove_and_clear(self, make_paper):
        store = LikedPaperStore()
        store.add(make_paper("a"))
        store.add(make_paper("b"))

        assert store.remove("a") is True
        assert store.remove("a") is False
        assert not store.contains("a")

        store.clear()
        assert len(store) == 0

    def test_update_summary(self, make_paper):
        store = LikedPaperStore()
        store.add(make_paper("a"))

        assert store.update_summary("a", "Short summary.") is True
        assert store.get("a").ai_summary == "Short summary."
        assert store.update_summary("missing", "x") is False

    def test_persists_with_camel_case_keys(self, tmp_path, make_paper):
        path = tmp_path / "liked.json"
        store = LikedPaperStore(path)
        store.load()
        store.add(make_paper("a"))
        store.update_summary("a", "Summary.")

        saved = json.loads(path.read_text(encoding="utf-8"))[STORAGE_KEY]
        assert saved[0]["id"] == "a"
        assert saved[0]["pdfLink"].endswith(".pdf")
        assert saved[0]["aiSummary"] == "Summary."

        reloaded = LikedPaperStore(path)
        reloaded.load()
        assert reloaded.get("a").ai_summary == "Summary."

    def test_nothing_written_before_load(self, tmp_path, make_paper):
        path = tmp_path / "liked.json"
        path.write_text(json.dumps({STORAGE_KEY: [{"id": "old", "title": "Old"}]}), encoding="utf-8")

        store = LikedPaperStore(path)
        assert store.contains("old") is False
        store.add(make_paper("new"))

        saved = json.loads(path.read_text(encoding="utf-8"))[STORAGE_KEY]
        assert [p["id"] for p in saved] == ["old"]

    def test_add_twice_before_load(self, tmp_path, make_paper):
        store = LikedPaperStore(tmp_path / "liked.json")
        paper = make_paper("new")

        assert store.add(paper) is True
        assert store.add(paper) is False
        assert len(store) == 1
        assert store.contains("new")

    def test_added_before_load_is_merged(self, tmp_path, make_paper):
        path = tmp_path / "liked.json"
        path.write_text(
            json.dumps({STORAGE_KEY: [{"id": "old", "title": "Old"}, {"id": "both", "title": "Both"}]}),
            encoding="utf-8",
        )

        store = LikedPaperStore(path)
        store.add(make_paper("new"))
        store.add(make_paper("both"))
        store.load()

        assert [p.id for p in store.list()] == ["old", "both", "new"]
        saved = json.loads(path.read_text(encoding="utf-8"))[STORAGE_KEY]
        assert [p["id"] for p in saved] == ["old", "both", "new"]

        reloaded = LikedPaperStore(path)
        reloaded.load()
        assert [p.id for p in reloaded.list()] == ["old", "both", "new"]

    def test_added_before_corrupt_load_is_kept(self, tmp_path, make_paper):
        path = tmp_path / "liked.json"
        path.write_text("{not json", encoding="utf-8")

        store = LikedPaperStore(path)
        store.add(make_paper("new"))
        store.load()

        assert [p.id for p in store.list()] == ["new"]
        saved = json.loads(path.read_text(encoding="utf-8"))[STORAGE_KEY]
        assert [p["id"] for p in saved] == ["new"]

    def test_missing_file_is_empty(self, tmp_path):
        store = LikedPaperStore(tmp_path / "nope.json")
        store.load()
        assert store.loaded
        assert store.list() == []

    def test_corrupt_file_is_discarded(self, tmp_path):
        path = tmp_path / "liked.json"
        path.write_text("{not json", encoding="utf-8")

        store = LikedPaperStore(path)
        store.load()

        assert store.list() == []
        assert not path.exists()

    def test_wrong_shape_is_discarded(self, tmp_path):
        path = tmp_path / "liked.json"
        path.write_text(json.dumps({STORAGE_KEY: [{"id": 1, "title": "Bad id"}]}), encoding="utf-8")

        store = LikedPaperStore(path)
        store.load()

        assert store.list() == []
        assert not path.exists()

    def test_write_failure_keeps_memory_state(self, tmp_path, make_paper):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        store = LikedPaperStore(blocker / "liked.json")
        store.load()

        assert store.add(make_paper("a")) is True
        assert store.contains("a")
