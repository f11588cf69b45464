import os
import unittest
from pathlib import Path

from packer_config.config.locator import plugin_directories, resolve_config_dir, resolve_config_path
from packer_config.plugins.discovery import PluginDirectory

HOME = Path("/home/builder")


class ResolveConfigPathTests(unittest.TestCase):
    def test_env_override(self) -> None:
        path = resolve_config_path({"PACKER_CONFIG": "/srv/packer.json"}, home=HOME)
        self.assertEqual(path, Path("/srv/packer.json"))

    def test_posix_default(self) -> None:
        self.assertEqual(resolve_config_path({}, home=HOME, platform="posix"), HOME / ".packerconfig")

    def test_windows_default_uses_appdata(self) -> None:
        path = resolve_config_path({"APPDATA": "/appdata"}, home=HOME, platform="nt")
        self.assertEqual(path, Path("/appdata") / "packer.config")

    def test_windows_without_appdata_falls_back_to_home(self) -> None:
        self.assertEqual(resolve_config_path({}, home=HOME, platform="nt"), HOME / "packer.config")

    def test_empty_override_is_ignored(self) -> None:
        self.assertEqual(
            resolve_config_path({"PACKER_CONFIG": ""}, home=HOME, platform="posix"), HOME / ".packerconfig"
        )


class ResolveConfigDirTests(unittest.TestCase):
    def test_defaults_and_override(self) -> None:
        self.assertEqual(resolve_config_dir({}, home=HOME, platform="posix"), HOME / ".packer.d")
        self.assertEqual(resolve_config_dir({"APPDATA": "/appdata"}, home=HOME, platform="nt"), Path("/appdata/packer.d"))
        self.assertEqual(resolve_config_dir({"PACKER_CONFIG_DIR": "/cfg"}, home=HOME), Path("/cfg"))


class PluginDirectoriesTests(unittest.TestCase):
    def test_order_and_required_flags(self) -> None:
        environ = {"PACKER_PLUGIN_PATH": os.pathsep.join(["/extra/one", "", "/extra/two"])}
        directories = plugin_directories(
            environ,
            config_path=Path("/etc/packer/config.json"),
            executable="/usr/local/bin/packer",
            cwd="/work",
            home=HOME,
            platform="posix",
        )
        self.assertEqual(
            directories,
            [
                PluginDirectory(Path("/usr/local/bin")),
                PluginDirectory(Path("/extra/one"), required=True),
                PluginDirectory(Path("/extra/two"), required=True),
                PluginDirectory(HOME / ".packer.d" / "plugins"),
                PluginDirectory(Path("/etc/packer")),
                PluginDirectory(Path("/work")),
            ],
        )

    def test_duplicates_collapse_to_first_position(self) -> None:
        environ = {"PACKER_PLUGIN_PATH": "/work"}
        directories = plugin_directories(
            environ,
            config_path=Path("/work/config.json"),
            executable="/work/packer",
            cwd="/work/",
            home=HOME,
            platform="posix",
        )
        self.assertEqual(
            directories,
            [
                PluginDirectory(Path("/work"), required=True),
                PluginDirectory(HOME / ".packer.d" / "plugins"),
            ],
        )

    def test_without_executable_or_cwd(self) -> None:
        directories = plugin_directories({}, config_path=HOME / ".packerconfig", home=HOME, platform="posix")
        self.assertEqual(
            [directory.path for directory in directories],
            [HOME / ".packer.d" / "plugins", HOME],
        )
        self.assertFalse(any(directory.required for directory in directories))


if __name__ == "__main__":
    unittest.main()
