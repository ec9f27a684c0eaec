import os
import json
from typing import List, Dict, Any, Optional
from dataclasses import dataclass
from pathlib import Path


def _resolve_path(path: str) -> Path:
    return Path(os.path.expanduser(path=path))


def _user_config_dir() -> Path:
    return Path.home().joinpath(".config")


def _rulelink_dir() -> Path:
    return _user_config_dir().joinpath("rulelink")


def _conf_path() -> Path:
    return _rulelink_dir().joinpath("rulelink.json")


@dataclass
class Config:
    """rulelink runtime config object"""

    __slots__ = (
        "rules_root",
        "force",
        "ignore",
    )

    rules_root: Optional[Path]
    force: bool
    ignore: List[str]

    __annotations__ = {
        "rules_root": Optional[Path],
        "force": bool,
        "ignore": List[str],
    }

    def _overrides(self, conf: dict) -> None:
        """apply overrides from conf"""

        _rules_root = conf.get("rules_root")
        if _rules_root is not None:
            setattr(self, "rules_root", _resolve_path(_rules_root))

        _force = conf.get("force")
        if _force is not None:
            setattr(self, "force", bool(_force))

        _ignore = conf.get("ignore")
        if _ignore is not None:
            setattr(self, "ignore", [str(i) for i in _ignore])

    def __init__(self, load: bool = True) -> None:
        self.rules_root = None
        self.force = True
        self.ignore = []

        if load:
            conf_path = _conf_path()
            if conf_path.exists():
                with conf_path.open("r") as f:
                    conf = json.load(f)
                self._overrides(conf=conf)

    def __repr__(self) -> str:
        attributes = [k for k in self.__slots__]
        width = max([len(i) for i in attributes])
        s = f"Config: {str(_conf_path())}\n"
        s += "-" * len(s) + "\n"
        for k in attributes:
            v = self.__getattribute__(k)
            space = " " * (width - len(str(k)) + 2)
            if isinstance(v, list):
                extra_space = " " * (width + 2) + "    "
                end_space = len(f"  {k}{space}")
                s += f"  {k}{space}[\n"
                s += ",\n".join([extra_space + str(i) for i in v])
                s += "\n" + (end_space * " ") + "]\n"
            else:
                s += f"  {k}{space}{str(v)}\n"
        return s

    def rules_directory(self) -> Path:
        """Returns the directory holding one rules directory per project"""
        return Path.cwd() if self.rules_root is None else self.rules_root

    def dict(self) -> Dict[str, Any]:
        """Returns a dict representation of the object"""
        return {
            "rules_root": None if self.rules_root is None else str(self.rules_root),
            "force": self.force,
            "ignore": list(self.ignore),
        }

    def save(self) -> None:
        """Write the config out to disk"""

        _rulelink_dir().mkdir(parents=True, exist_ok=True)
        with open(_conf_path(), "w") as f:
            f.write(json.dumps(self.dict(), indent=4))
