import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from arrstack_gen import __version__
from arrstack_gen.config import (
    CONFIG_DIR_ENV,
    create_default_settings,
    get_compose_path,
    get_config_path,
    load_settings,
    save_settings,
)
from arrstack_gen.models import VpnMode


class ConfigPathTests(unittest.TestCase):
    def test_home_override(self):
        with mock.patch.dict(os.environ, {CONFIG_DIR_ENV: "/tmp/arrstack-test"}):
            self.assertEqual(get_config_path(), Path("/tmp/arrstack-test/config.json"))
            self.assertEqual(get_compose_path(), Path("/tmp/arrstack-test/docker-compose.yml"))

    def test_default_location(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            with mock.patch("arrstack_gen.config.Path.home", return_value=Path("/home/media")):
                self.assertEqual(get_config_path(), Path("/home/media/.arrstack/config.json"))


class LoadSettingsTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "config.json"

    def test_missing_file_returns_none(self):
        self.assertIsNone(load_settings(self.path))

    def test_non_object_is_rejected(self):
        self.path.write_text("[]", encoding="utf-8")
        with self.assertRaises(ValueError):
            load_settings(self.path)

    def test_reads_camel_case_layout(self):
        data = {
            "version": __version__,
            "rootDir": "/srv/media",
            "timezone": "Europe/Paris",
            "uid": 1001,
            "gid": 1001,
            "umask": "022",
            "apps": [{"id": "radarr", "enabled": True, "customEnv": {"FOO": "bar"}}],
            "vpn": {"mode": "mini", "provider": "mullvad"},
            "traefik": {"enabled": True, "domain": "example.com", "entrypoint": "web", "middlewares": []},
        }
        self.path.write_text(json.dumps(data), encoding="utf-8")

        settings = load_settings(self.path)

        self.assertEqual(settings.root_dir, "/srv/media")
        self.assertEqual(settings.apps[0].custom_env, {"FOO": "bar"})
        self.assertEqual(settings.vpn.mode, VpnMode.MINI)
        self.assertEqual(settings.reverse_proxy.entrypoint, "web")
        self.assertFalse((self.path.parent / "backups").exists())

    def test_old_version_is_migrated_with_backup(self):
        self.path.write_text(json.dumps({"version": "0.0.1", "rootDir": "/srv"}), encoding="utf-8")

        settings = load_settings(self.path)

        self.assertEqual(settings.version, __version__)
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8"))["version"], __version__)
        backups = list((self.path.parent / "backups").iterdir())
        self.assertEqual(len(backups), 1)
        self.assertEqual(json.loads(backups[0].read_text(encoding="utf-8"))["version"], "0.0.1")

    def test_read_only_load_skips_migration(self):
        self.path.write_text(json.dumps({"version": "0.0.1", "rootDir": "/srv"}), encoding="utf-8")

        settings = load_settings(self.path, migrate=False)

        self.assertEqual(settings.version, "0.0.1")
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8"))["version"], "0.0.1")
        self.assertFalse((self.path.parent / "backups").exists())

    def test_save_and_load_round_trip(self):
        settings = create_default_settings("/srv/media")
        save_settings(settings, self.path)

        raw = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(raw["rootDir"], "/srv/media")
        self.assertIn("createdAt", raw)

        loaded = load_settings(self.path)
        self.assertEqual(loaded.root_dir, "/srv/media")
        self.assertEqual(loaded.uid, settings.uid)
        self.assertEqual(loaded.timezone, settings.timezone)


if __name__ == "__main__":
    unittest.main()
