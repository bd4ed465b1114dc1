import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "github"))
sys.path.insert(0, str(ROOT / "apps" / "action"))

from setup_phpstan_action.installer import install
from setup_phpstan_core.config import DEFAULT_CONFIG
from setup_phpstan_core.errors import CacheRestoreFailed, CacheSaveFailed, DownloadFailed
from setup_phpstan_github.models import Asset, AssetSelector, ReleaseSelector


class FakeCache:
    def __init__(self, hit: bool = False, save_error: Exception | None = None, restore_error: Exception | None = None):
        self.hit = hit
        self.save_error = save_error
        self.restore_error = restore_error
        self.restored: list[tuple] = []
        self.saved: list[tuple] = []

    def restore_cache(self, paths, key):
        self.restored.append((list(paths), key))
        if self.restore_error is not None:
            raise self.restore_error
        return key if self.hit else None

    def save_cache(self, paths, key):
        self.saved.append((list(paths), key))
        if self.save_error is not None:
            raise self.save_error


class FakeDownload:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[tuple] = []

    def __call__(self, owner, repo, destination, release_selector, asset_selector):
        self.calls.append((owner, repo, destination, release_selector, asset_selector))
        if self.error is not None:
            raise self.error
        (destination / "phpstan.phar").write_bytes(b"phar")
        return [destination / "phpstan.phar"]


class InstallTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.install_dir = Path(self._tmp.name)
        self.asset = Asset(id=42, name="phpstan.phar", url="https://example/phpstan.phar")

    def tearDown(self):
        self._tmp.cleanup()

    def _install(self, cache, download):
        return install(DEFAULT_CONFIG, 7, self.asset, self.install_dir, "key-1", cache, download)

    def test_cache_hit_skips_download(self):
        cache, download = FakeCache(hit=True), FakeDownload()
        self.assertEqual(self._install(cache, download), self.install_dir)
        self.assertEqual(cache.restored, [([str(self.install_dir)], "key-1")])
        self.assertEqual(download.calls, [])
        self.assertEqual(cache.saved, [])

    def test_cache_miss_downloads_once_then_saves_once(self):
        cache, download = FakeCache(), FakeDownload()
        self.assertEqual(self._install(cache, download), self.install_dir)

        self.assertEqual(len(download.calls), 1)
        owner, repo, dest, release_sel, asset_sel = download.calls[0]
        self.assertEqual((owner, repo, dest), ("phpstan", "phpstan", self.install_dir))
        self.assertEqual(release_sel, ReleaseSelector(7))
        self.assertEqual(asset_sel, AssetSelector(42))
        self.assertEqual(cache.saved, [([str(self.install_dir)], "key-1")])

    def test_download_failure_is_fatal_and_skips_save(self):
        cache = FakeCache()
        with self.assertRaises(DownloadFailed):
            self._install(cache, FakeDownload(error=OSError("connection reset")))
        self.assertEqual(cache.saved, [])

    def test_cache_save_failure_only_warns(self):
        cache = FakeCache(save_error=CacheSaveFailed("reserved"))
        with self.assertLogs("setup_phpstan", level="WARNING") as logs:
            self.assertEqual(self._install(cache, FakeDownload()), self.install_dir)
        self.assertIn("reserved", "\n".join(logs.output))
        self.assertTrue((self.install_dir / "phpstan.phar").exists())

    def test_restore_failure_falls_back_to_download(self):
        cache, download = FakeCache(restore_error=CacheRestoreFailed("bad manifest")), FakeDownload()
        self._install(cache, download)
        self.assertEqual(len(download.calls), 1)


if __name__ == "__main__":
    unittest.main()
