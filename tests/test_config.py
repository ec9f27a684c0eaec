import json
from pathlib import Path

import pytest

from rulelink import config


class TestConfig:
    @staticmethod
    def test_default_config() -> None:
        """test_default_config"""
        c = config.Config(load=False)
        assert c.rules_root is None
        assert c.force is True
        assert c.ignore == []

    @staticmethod
    def test_overload_config() -> None:
        """test_overload_config"""

        c = config.Config(load=False)
        c._overrides({"rules_root": "~/rules", "force": False, "ignore": [".DS_Store", ".git"]})

        assert c.rules_root == Path.home().joinpath("rules")
        assert c.force is False
        assert c.ignore == [".DS_Store", ".git"]

    @staticmethod
    def test_rules_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """rules directory falls back to the working directory"""

        monkeypatch.chdir(tmp_path)
        c = config.Config(load=False)
        assert c.rules_directory() == Path.cwd()

        c.rules_root = tmp_path.joinpath("rules")
        assert c.rules_directory() == tmp_path.joinpath("rules")

    @staticmethod
    def test_save_and_load(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """saved config is picked up on load"""

        monkeypatch.setattr(config, "_rulelink_dir", lambda: tmp_path.joinpath("rulelink"))
        monkeypatch.setattr(config, "_conf_path", lambda: tmp_path.joinpath("rulelink", "rulelink.json"))

        c = config.Config(load=False)
        c.force = False
        c.ignore = [".DS_Store"]
        c.save()

        assert json.loads(tmp_path.joinpath("rulelink", "rulelink.json").read_text()) == {
            "rules_root": None,
            "force": False,
            "ignore": [".DS_Store"],
        }

        loaded = config.Config()
        assert loaded.force is False
        assert loaded.ignore == [".DS_Store"]

    @staticmethod
    def test_repr() -> None:
        """repr lists every setting"""

        text = repr(config.Config(load=False))
        for k in ("rules_root", "force", "ignore"):
            assert k in text
