import dataclasses
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Self

from ruamel.yaml.error import YAMLError
from sensai.util import logging
from sensai.util.string import ToStringMixin

from razorsnap.constants import RAZORSNAP_CONFIG_FILE_NAME, default_razorsnap_home_dir
from razorsnap.exceptions import ListenerConfigError
from razorsnap.util.yaml import load_yaml, save_yaml

log = logging.getLogger(__name__)


class RazorsnapPaths:
    """
    Provides paths to razorsnap's user-level files.
    """

    def __init__(self) -> None:
        home_dir = os.getenv("RAZORSNAP_HOME")
        if home_dir is None or home_dir.strip() == "":
            home_dir = default_razorsnap_home_dir()
        else:
            home_dir = home_dir.strip()
        self.razorsnap_home_dir: str = home_dir
        """
        the directory holding the user's razorsnap configuration.
        This is ~/.razorsnap by default, but it can be overridden via the RAZORSNAP_HOME environment variable.
        """
        self.config_file: str = os.path.join(self.razorsnap_home_dir, RAZORSNAP_CONFIG_FILE_NAME)


@dataclass(kw_only=True)
class ListenerConfig(ToStringMixin):
    debug_wait_enabled: bool = False
    """
    whether projects setting `_DebugRazorOmnisharpPlugin_` to `true` make the listener wait for a debugger to attach.
    Intended for development of razorsnap only.
    """
    debug_poll_interval: float = 1.0
    """
    the interval (in seconds) at which the debugger wait checks whether a debugger has attached
    """
    tag_helper_resolution_timeout: float | None = None
    """
    the maximum time (in seconds) to wait for a project's tag helpers to be resolved; None for no limit.
    If exceeded, no document is written for the event.
    """
    log_level: str = "INFO"

    def _tostring_includes(self) -> list[str]:
        return ["debug_wait_enabled", "tag_helper_resolution_timeout", "log_level"]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """
        Creates a configuration from a (possibly partial) dictionary; missing keys take their default values.

        :raises ListenerConfigError: if the dictionary contains unknown keys or values of the wrong type
        """
        field_names = {f.name for f in dataclasses.fields(cls)}
        unknown_keys = set(data.keys()) - field_names
        if unknown_keys:
            raise ListenerConfigError(f"Unknown configuration keys {sorted(unknown_keys)}; valid keys are {sorted(field_names)}")

        config = cls(**data)
        if not isinstance(config.debug_wait_enabled, bool):
            raise ListenerConfigError(f"debug_wait_enabled must be a boolean, got {config.debug_wait_enabled!r}")
        if not isinstance(config.debug_poll_interval, int | float) or config.debug_poll_interval <= 0:
            raise ListenerConfigError(f"debug_poll_interval must be a positive number, got {config.debug_poll_interval!r}")
        timeout = config.tag_helper_resolution_timeout
        if timeout is not None and (not isinstance(timeout, int | float) or timeout <= 0):
            raise ListenerConfigError(f"tag_helper_resolution_timeout must be a positive number or null, got {timeout!r}")
        return config

    @classmethod
    def load(cls, path: str | Path | None = None) -> Self:
        """
        Loads the configuration from the given YAML file or, if no path is given, from the user's configuration
        file, falling back to the default configuration if that file does not exist.
        """
        if path is None:
            path = RazorsnapPaths().config_file
            if not os.path.exists(path):
                log.debug("No configuration file found at %s; using defaults", path)
                return cls()
        try:
            data = load_yaml(str(path))
        except (OSError, ValueError, YAMLError) as e:
            raise ListenerConfigError(f"Could not load configuration from {path}", cause=e) from e
        config = cls.from_dict(dict(data))
        log.info("Loaded %s from %s", config, path)
        return config

    def save(self, path: str | Path) -> None:
        save_yaml(str(path), dataclasses.asdict(self), preserve_comments=False)
