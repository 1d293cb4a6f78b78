"""Configuration file parser."""

import logging
from abc import ABC, abstractmethod
from io import StringIO
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, TextIO, Type, TypeVar

import yaml

from dicograph.logs import fatal
from dicograph.reduction import PASSES

T = TypeVar("T", bound="Config")


class Config(ABC):

    """Abstract base class for YAML configuration.

    Subclasses should override the abstract property "defaults".

    Example usage:

        # Assuming MyConfig is a subclass of Config:
        cfg = MyConfig.load(Path("/path/to/config.yml"))
        cfg.validate()

    Note that the creator must call validate(). They can optionally pass extra
    defaults as keyword arguments. This is useful if the default is
    context-dependent (static defaults go in the "defaults" dict).
    """

    def __init__(self, path: Path, data: Mapping[str, Any]):
        self.path = path
        self.data = data

    def __repr__(self) -> str:
        name = self.__class__.__name__
        return f"{name}(path={self.path!r}, data={self.data!r})"

    @property
    @abstractmethod
    def defaults(self) -> Dict[str, Any]:
        """Configuration keys and their default values."""

    def validate(self, **defaults: Any):
        """Validate the loaded configuration.

        This must be called manually after creating an instance.

        Extra defaults can be passed for keys as keyword arguments. They will
        override the ones from the "defaults" property. Unknown keys are
        reported and kept.
        """
        for key in self.data:
            if key not in self.defaults:
                logging.warning("%s: unknown key %r", self.path, key)
        self.data = {**self.defaults, **defaults, **self.data}

    @classmethod
    def load(cls: Type[T], path: Path) -> T:
        """Load configuration from a file."""
        with open(path, encoding="utf-8") as f:
            return cls.load_from(path, f)

    @classmethod
    def loads(cls: Type[T], path: Path, content: str) -> T:
        """Load configuration from a string."""
        return cls.load_from(path, StringIO(content))

    @classmethod
    def load_from(cls: Type[T], path: Path, content: TextIO) -> T:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as ex:
            logging.error("cannot parse %s: %s", path, ex)
            data = {}
        if data is None:
            data = {}
        if not isinstance(data, dict):
            logging.error("invalid YAML in %s: %s", path, type(data))
            data = {}
        return cls(path, data)

    def __getitem__(self, key: str) -> Any:
        """Get a configuration value."""
        return self.data[key]


class RunConfig(Config):

    """Settings for reducing a dictionary, usually from dicograph.yml."""

    FILENAME = "dicograph.yml"

    defaults = {
        "passes": ["basic"],
        "graphviz": False,
        "max_rounds": None,
    }

    def validate(self, **defaults: Any):
        super().validate(**defaults)
        passes = self.data["passes"]
        if isinstance(passes, str):
            passes = [passes]
        if not isinstance(passes, list):
            logging.error("%s: passes must be a list", self.path)
            passes = self.defaults["passes"]
        known = []
        for name in passes:
            if isinstance(name, str) and name in PASSES:
                known.append(name)
            else:
                logging.error("%s: unknown reduction pass %r", self.path, name)
        self.data["passes"] = known
        max_rounds = self.data["max_rounds"]
        if max_rounds is not None and (
            isinstance(max_rounds, bool)
            or not isinstance(max_rounds, int)
            or max_rounds < 1
        ):
            logging.error("%s: max_rounds must be a positive integer", self.path)
            self.data["max_rounds"] = None

    @property
    def passes(self) -> List[str]:
        return self.data["passes"]

    @staticmethod
    def find(path: Optional[Path] = None) -> "RunConfig":
        """Load the configuration at path, or dicograph.yml if it exists.

        Falls back to the defaults when there is no configuration file.
        """
        if path is None:
            default = Path(RunConfig.FILENAME)
            if default.is_file():
                path = default
        if path is None:
            cfg = RunConfig(Path("<defaults>"), {})
        else:
            if not path.is_file():
                fatal("configuration file %s not found", path)
            logging.info("loading configuration %s", path)
            cfg = RunConfig.load(path)
        cfg.validate()
        logging.debug("run config: %r", cfg)
        return cfg
