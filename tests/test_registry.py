import unittest

from arrstack_gen.arch import get_arch_warning, get_system_arch, is_app_compatible, is_app_deprecated
from arrstack_gen.constants import HOST_NETWORK_APP, IDENTITY_ENV_APPS, REVERSE_PROXY_APP, VPN_GATEWAY_APP
from arrstack_gen.models import AppCategory, AppDefinition, ArchCompatibility, Architecture
from arrstack_gen.registry import (
    APPS,
    get_app,
    get_apps_by_category,
    get_apps_with_arch_warnings,
    get_compatible_apps,
)


class RegistryTests(unittest.TestCase):
    def test_keys_match_identifiers(self):
        for app_id, app in APPS.items():
            self.assertEqual(app_id, app.id)

    def test_dependencies_resolve_in_registry(self):
        for app in APPS.values():
            for dependency in app.depends_on:
                self.assertIn(dependency, APPS, f"{app.id} depends on unknown {dependency}")
                self.assertNotEqual(dependency, app.id)

    def test_special_apps_exist(self):
        self.assertEqual(get_app(HOST_NETWORK_APP).category, AppCategory.MEDIA_SERVER)
        self.assertEqual(get_app(VPN_GATEWAY_APP).category, AppCategory.VPN)
        self.assertIsNotNone(get_app(REVERSE_PROXY_APP))
        for app_id in IDENTITY_ENV_APPS:
            self.assertEqual(get_app(app_id).puid, 0)

    def test_volume_templates_are_pure(self):
        radarr = get_app("radarr")
        self.assertEqual(radarr.volumes("/a"), ["/a/config/radarr:/config", "/a/data:/data"])
        self.assertEqual(radarr.volumes("${ROOT_DIR}"), ["${ROOT_DIR}/config/radarr:/config", "${ROOT_DIR}/data:/data"])
        self.assertEqual(get_app("flaresolverr").volumes("/a"), [])

    def test_registry_is_read_only(self):
        with self.assertRaises(TypeError):
            APPS["radarr"] = APPS["sonarr"]  # type: ignore[index]

    def test_unknown_app(self):
        self.assertIsNone(get_app("nope"))

    def test_grouping_by_category(self):
        grouped = get_apps_by_category()
        self.assertIn("qbittorrent", [app.id for app in grouped[AppCategory.DOWNLOADER]])
        self.assertEqual(sum(len(apps) for apps in grouped.values()), len(APPS))


class ArchTests(unittest.TestCase):
    def test_machine_mapping(self):
        self.assertEqual(get_system_arch("x86_64"), Architecture.X64)
        self.assertEqual(get_system_arch("aarch64"), Architecture.ARM64)
        self.assertEqual(get_system_arch("armv7l"), Architecture.ARM32)
        self.assertEqual(get_system_arch("riscv64"), Architecture.X64)

    def test_deprecated_architecture(self):
        readarr = get_app("readarr")
        self.assertFalse(is_app_compatible(readarr, Architecture.ARM64))
        self.assertTrue(is_app_compatible(readarr, Architecture.X64))
        self.assertTrue(is_app_deprecated(readarr, Architecture.ARM32))
        self.assertIn("deprecated", get_arch_warning(readarr, Architecture.ARM64))
        self.assertIsNone(get_arch_warning(readarr, Architecture.X64))

    def test_supported_list(self):
        app = AppDefinition(
            id="x64-only",
            name="X64 Only",
            category=AppCategory.UTILITY,
            default_port=1,
            image="example/x64",
            volumes=lambda root: [],
            arch=ArchCompatibility(supported=[Architecture.X64]),
        )
        self.assertFalse(is_app_compatible(app, Architecture.ARM64))
        self.assertEqual(get_arch_warning(app, Architecture.ARM64), "X64 Only does not support arm64 architecture")

    def test_default_warning_text(self):
        app = AppDefinition(
            id="old",
            name="Old",
            category=AppCategory.UTILITY,
            default_port=1,
            image="example/old",
            volumes=lambda root: [],
            arch=ArchCompatibility(deprecated=[Architecture.ARM32]),
        )
        self.assertEqual(get_arch_warning(app, Architecture.ARM32), "Old has deprecated support for arm32")

    def test_registry_helpers(self):
        compatible = {app.id for app in get_compatible_apps(Architecture.ARM64)}
        self.assertNotIn("readarr", compatible)
        self.assertIn("radarr", compatible)
        warned = [app.id for app, _ in get_apps_with_arch_warnings(Architecture.ARM64)]
        self.assertEqual(warned, ["readarr"])


if __name__ == "__main__":
    unittest.main()
