"""Tests for building the catalog feed from a sticker directory."""
import json

from catalog import build_feed_from_directory, category_key, display_category, normalize
import generate_stickers


class TestCategoryNames:

    def test_category_key(self):
        assert category_key("party-hat03") == "party-hat"
        assert category_key("Cat1") == "Cat"
        assert category_key("42") == "other"

    def test_display_category(self):
        assert display_category("party-hat") == "Party Hat"
        assert display_category("other") == "Other"


class TestBuildFeed:

    def _populate(self, d, make_png, names):
        for name in names:
            (d / name).write_bytes(make_png(32, 32))

    def test_groups_and_sorting(self, tmp_path, make_png):
        self._populate(tmp_path, make_png, [
            "star2.png", "star1.png", "party-hat01.png", "7up.png", "apple1.png",
        ])
        (tmp_path / "notes.txt").write_text("not a sticker")

        feed = build_feed_from_directory(str(tmp_path))
        assert [g["category"] for g in feed] == ["Apple", "Other", "Party Hat", "Star"]
        star = feed[-1]
        assert [i["id"] for i in star["items"]] == ["star1", "star2"]
        assert star["items"][0] == {"id": "star1", "file": "star1.png", "label": "star"}
        assert feed[2]["items"][0]["label"] == "party hat"

    def test_skips_unreadable_images(self, tmp_path, make_png, caplog):
        self._populate(tmp_path, make_png, ["good1.png"])
        (tmp_path / "broken1.png").write_bytes(b"definitely not a png")
        feed = build_feed_from_directory(str(tmp_path))
        assert [i["id"] for g in feed for i in g["items"]] == ["good1"]
        assert "broken1.png" in caplog.text

    def test_feed_normalizes(self, tmp_path, make_png):
        self._populate(tmp_path, make_png, ["moon1.png", "moon2.png", "sun1.png"])
        cat = normalize(build_feed_from_directory(str(tmp_path)))
        assert set(cat.by_id) == {"moon1", "moon2", "sun1"}
        assert cat.get("sun1").category == "Sun"


class TestScript:

    def test_main_writes_json(self, tmp_path, make_png, capsys):
        stickers = tmp_path / "stickers"
        stickers.mkdir()
        (stickers / "heart1.png").write_bytes(make_png(16, 16, "pink"))
        out = tmp_path / "stickers.json"

        rc = generate_stickers.main(["--dir", str(stickers), "--out", str(out)])

        assert rc == 0
        feed = json.loads(out.read_text(encoding="utf-8"))
        assert feed == [{"category": "Heart", "items": [
            {"id": "heart1", "file": "heart1.png", "label": "heart"}]}]
        assert "Wrote 1 stickers" in capsys.readouterr().out

    def test_main_missing_dir(self, tmp_path):
        assert generate_stickers.main(["--dir", str(tmp_path / "nope"),
                                       "--out", str(tmp_path / "x.json")]) == 1
