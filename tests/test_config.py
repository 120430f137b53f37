import os
import sys
import tempfile
import unittest
from unittest import mock
import keyring
import keyring.backend
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from config import YamlConfig, default_config_path, resolve_api_key


class DummyKeyring(keyring.backend.KeyringBackend):
    priority = 1

    def __init__(self):
        self.store = {}

    def get_password(self, service, username):
        return self.store.get((service, username))

    def set_password(self, service, username, password):
        self.store[(service, username)] = password

    def delete_password(self, service, username):
        self.store.pop((service, username), None)


class ConfigTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "nested", "config.yaml")
        self.env = mock.patch.dict(os.environ, {}, clear=False)
        self.env.start()
        os.environ.pop("ENCRYPT_SETTINGS", None)
        os.environ.pop("HEVY_API_KEY", None)

    def tearDown(self) -> None:
        self.env.stop()
        self.tmp.cleanup()


class YamlConfigTest(ConfigTestCase):
    def test_missing_file_is_empty(self) -> None:
        cfg = YamlConfig(self.path)
        self.assertEqual(cfg.load(), {})
        self.assertIsNone(cfg.settings().api_key)

    def test_store_api_key_creates_dirs(self) -> None:
        cfg = YamlConfig(self.path)
        cfg.store_api_key("abc123")
        self.assertTrue(os.path.exists(self.path))
        self.assertEqual(cfg.settings().api_key, "abc123")

    def test_encrypted_key_lives_in_keyring(self) -> None:
        backend = DummyKeyring()
        keyring.set_keyring(backend)
        os.environ["ENCRYPT_SETTINGS"] = "1"
        cfg = YamlConfig(self.path)
        cfg.store_api_key("secret")
        with open(self.path, encoding="utf-8") as f:
            self.assertNotIn("secret", f.read())
        self.assertEqual(backend.store[("hevy-bridge", "api_key")], "secret")
        self.assertEqual(cfg.load()["api_key"], "secret")

    def test_invalid_settings(self) -> None:
        with open(os.path.join(self.tmp.name, "bad.yaml"), "w", encoding="utf-8") as f:
            f.write("timeout: soon\n")
        with self.assertRaises(ValueError):
            YamlConfig(os.path.join(self.tmp.name, "bad.yaml")).settings()

    def test_default_path_env_override(self) -> None:
        os.environ["HEVY_BRIDGE_CONFIG"] = self.path
        self.assertEqual(default_config_path(), self.path)
        os.environ.pop("HEVY_BRIDGE_CONFIG")
        os.environ["XDG_CONFIG_HOME"] = self.tmp.name
        self.assertEqual(
            default_config_path(),
            os.path.join(self.tmp.name, "hevy-bridge", "config.yaml"),
        )


class ResolveApiKeyTest(ConfigTestCase):
    def test_flag_wins(self) -> None:
        os.environ["HEVY_API_KEY"] = "from-env"
        self.assertEqual(resolve_api_key("from-flag", YamlConfig(self.path)), "from-flag")

    def test_env_before_config(self) -> None:
        cfg = YamlConfig(self.path)
        cfg.store_api_key("stored")
        os.environ["HEVY_API_KEY"] = "from-env"
        self.assertEqual(resolve_api_key(None, cfg), "from-env")
        os.environ["HEVY_API_KEY"] = ""
        self.assertEqual(resolve_api_key(None, cfg), "stored")

    def test_missing_key(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            resolve_api_key(None, YamlConfig(self.path))
        self.assertIn("HEVY_API_KEY", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
