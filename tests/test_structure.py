import tempfile
import unittest
from pathlib import Path
from unittest import mock

from arrstack_gen.models import AppSelection, GlobalSettings
from arrstack_gen.structure import ensure_directory_structure, planned_directories


class DirectoryStructureTests(unittest.TestCase):
    def test_planned_directories_follow_enabled_apps(self):
        settings = GlobalSettings(
            root_dir="/srv",
            apps=[
                AppSelection(id="radarr", enabled=True),
                AppSelection(id="sonarr", enabled=False),
                AppSelection(id="flaresolverr", enabled=True),
            ],
        )
        dirs = planned_directories(settings)

        self.assertIn(Path("/srv/data/torrents/movies"), dirs)
        self.assertIn(Path("/srv/data/usenet/complete/movies"), dirs)
        self.assertIn(Path("/srv/data/media/movies"), dirs)
        self.assertIn(Path("/srv/config/radarr"), dirs)
        self.assertNotIn(Path("/srv/data/media/tv"), dirs)
        self.assertNotIn(Path("/srv/config/flaresolverr"), dirs)
        self.assertEqual(len(dirs), len(set(dirs)))

    def test_creates_directories(self):
        with tempfile.TemporaryDirectory() as tmp:
            settings = GlobalSettings(root_dir=tmp, apps=[AppSelection(id="sonarr", enabled=True)])

            created = ensure_directory_structure(settings)

            self.assertTrue(created)
            self.assertTrue((Path(tmp) / "data" / "media" / "tv").is_dir())
            self.assertTrue((Path(tmp) / "config" / "sonarr").is_dir())

    def test_permission_error_is_reported_not_raised(self):
        settings = GlobalSettings(root_dir="/srv", apps=[AppSelection(id="radarr", enabled=True)])
        with mock.patch("arrstack_gen.structure.Path.mkdir", side_effect=PermissionError("denied")):
            with self.assertLogs("arrstack_gen.structure", level="WARNING"):
                self.assertEqual(ensure_directory_structure(settings), [])

    def test_missing_root_dir_creates_nothing(self):
        settings = GlobalSettings(apps=[AppSelection(id="radarr", enabled=True)])
        with mock.patch("arrstack_gen.structure.Path.mkdir") as mkdir:
            with self.assertLogs("arrstack_gen.structure", level="WARNING"):
                self.assertEqual(ensure_directory_structure(settings), [])
        mkdir.assert_not_called()


if __name__ == "__main__":
    unittest.main()
