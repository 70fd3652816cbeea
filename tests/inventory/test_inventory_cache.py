import json
import tempfile
import unittest
from pathlib import Path

from gdrivefetch.errors import CacheError
from gdrivefetch.inventory import InventoryCache
from gdrivefetch.models import FileRecord, InventorySnapshot, LocalFileRecord
from gdrivefetch.util.mime import FOLDER_MIME


def _snapshot() -> InventorySnapshot:
    return InventorySnapshot(
        remote=[
            FileRecord(file_id="r1", name="root", mime_type=FOLDER_MIME),
            FileRecord(
                file_id="f1",
                name="a.txt",
                mime_type="text/plain",
                parents=("r1",),
                md5_checksum="abc",
            ),
            FileRecord(
                file_id="g1",
                name="notes",
                mime_type="application/vnd.google-apps.document",
                parents=("r1", "r2"),
                md5_checksum="",
            ),
        ],
        local=[LocalFileRecord(path="dir/a.txt", md5_checksum="abc")],
    )


class TestInventoryCache(unittest.TestCase):
    def test_missing_file_loads_empty_snapshot(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cache = InventoryCache(str(Path(tmp) / "files.json"))
            self.assertFalse(cache.exists())
            self.assertEqual(cache.load(), InventorySnapshot())

    def test_save_then_load_round_trips(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cache = InventoryCache(str(Path(tmp) / "files.json"))
            original = _snapshot()

            cache.save(original)
            loaded = cache.load()

            self.assertEqual(loaded, original)
            self.assertEqual(loaded.remote[0].parents, ())
            self.assertEqual(loaded.remote[0].md5_checksum, "")

    def test_saved_document_schema(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "files.json"
            InventoryCache(str(path)).save(_snapshot())

            data = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(set(data), {"remote", "local"})
            self.assertEqual(
                data["remote"][1],
                {
                    "id": "f1",
                    "name": "a.txt",
                    "md5Checksum": "abc",
                    "mimeType": "text/plain",
                    "parents": ["r1"],
                },
            )
            self.assertEqual(data["local"][0], {"path": "dir/a.txt", "md5Checksum": "abc"})

    def test_save_replaces_whole_document(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cache = InventoryCache(str(Path(tmp) / "files.json"))
            cache.save(_snapshot())
            cache.save(InventorySnapshot(local=[LocalFileRecord(path="x", md5_checksum="m")]))

            loaded = cache.load()
            self.assertEqual(loaded.remote, [])
            self.assertEqual(len(loaded.local), 1)
            # No temp files left behind.
            self.assertEqual([p.name for p in Path(tmp).iterdir()], ["files.json"])

    def test_malformed_json_is_treated_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "files.json"
            path.write_text("{not json", encoding="utf-8")

            with self.assertLogs("gdrivefetch.inventory.cache", level="WARNING"):
                snap = InventoryCache(str(path)).load()
            self.assertEqual(snap, InventorySnapshot())

    def test_unreadable_cache_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            # A directory at the cache path cannot be opened as a file.
            path = Path(tmp) / "files.json"
            path.mkdir()

            with self.assertRaises(CacheError):
                InventoryCache(str(path)).load()

    def test_clear(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cache = InventoryCache(str(Path(tmp) / "files.json"))
            cache.save(_snapshot())
            cache.clear()
            self.assertFalse(cache.exists())
            cache.clear()


if __name__ == "__main__":
    unittest.main()
