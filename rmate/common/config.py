"""Connection configuration loading and precedence resolution"""

import argparse
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from rmate.common.errors import ConfigError, UsageError
from rmate.common.ssh_detect import sshClientAddress_detect

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = "52698"
AUTO_HOST = "auto"

HOST_ENV = "RMATE_HOST"
PORT_ENV = "RMATE_PORT"

MIN_PORT = 1
MAX_PORT = 65535

_PORT_PATTERN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class ConnectionConfig:
    """Fully resolved settings for one rmate invocation"""
    host: str
    port: int
    file_argument: str
    wait: bool = False
    force: bool = False
    verbose: bool = False
    line: Optional[str] = None  # passed through verbatim, may be "line:column"
    display_type: Optional[str] = None
    display_name: Optional[str] = None


class ConfigLoader:
    """Merges defaults, an optional config file, environment and command-line flags"""

    RC_KEYS = ("host", "port")

    @staticmethod
    def yaml_load(file_path: Path) -> Dict[str, Any]:
        """
        Load a YAML config file

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed settings dictionary (empty for an empty file)

        Raises:
            FileNotFoundError: If file does not exist
            ConfigError: If file is not UTF-8, not valid YAML or not a mapping
        """
        with open(file_path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except UnicodeDecodeError as exc:
                raise ConfigError(f"Config file {file_path} is not UTF-8: {exc}") from exc
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {file_path}: {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {file_path} must contain a YAML dictionary")

        return data

    @staticmethod
    def configFile_load(file_path: Optional[str], verbose: bool = False) -> Dict[str, str]:
        """
        Load the config file named by `--config`

        No file is read unless one is named, so without `--config` the
        precedence is flag, then environment, then compiled default.

        Args:
            file_path: Path given on the command line, or None
            verbose: Log which file was read

        Returns:
            Settings restricted to RC_KEYS, as strings

        Raises:
            ConfigError: If the file cannot be read or is malformed
        """
        if file_path is None:
            return {}
        path = Path(file_path).expanduser()
        try:
            data = ConfigLoader.yaml_load(path)
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
        if verbose:
            logger.info("Read settings from %s", path)
        return {key: str(data[key]) for key in ConfigLoader.RC_KEYS if data.get(key) is not None}

    @staticmethod
    def setting_pick(
        flag_value: Optional[str],
        environ: Mapping[str, str],
        env_name: str,
        rc_value: Optional[str],
        default: str,
    ) -> str:
        """
        Pick a scalar setting by precedence

        Args:
            flag_value: Value from the command line, or None
            environ: Process environment mapping
            env_name: Environment variable name
            rc_value: Value from the config file, or None
            default: Compiled-in default

        Returns:
            Flag if given, else non-empty environment value, else rc value,
            else the default
        """
        if flag_value is not None:
            return flag_value
        env_value = environ.get(env_name)
        if env_value:
            return env_value
        if rc_value is not None:
            return rc_value
        return default

    @staticmethod
    def port_parse(port_str: str) -> int:
        """
        Parse a port string into a TCP port number

        Args:
            port_str: Port as supplied by flag, environment or default

        Returns:
            Port number in [MIN_PORT, MAX_PORT]

        Raises:
            ConfigError: If the value is not numeric or out of range
        """
        if not _PORT_PATTERN.fullmatch(port_str):
            raise ConfigError(f"Invalid port number: '{port_str}' is not numeric")
        port = int(port_str)
        if not MIN_PORT <= port <= MAX_PORT:
            raise ConfigError(
                f"Invalid port number: {port_str} is outside {MIN_PORT}-{MAX_PORT}"
            )
        return port

    @staticmethod
    def optional_validate(flag_name: str, value: Optional[str]) -> Optional[str]:
        """
        Reject empty values for pass-through string flags

        Raises:
            ConfigError: If the flag was given with an empty value
        """
        if value is not None and not value:
            raise ConfigError(f"Empty value given for {flag_name}")
        return value

    @staticmethod
    def host_resolve(host: str, environ: Mapping[str, str], verbose: bool) -> str:
        """
        Replace the 'auto' sentinel with the SSH client address

        Raises:
            ConfigError: If host is 'auto' and detection fails, or host is empty
        """
        if not host:
            raise ConfigError("Empty host name")
        if host != AUTO_HOST:
            return host
        return sshClientAddress_detect(environ, verbose=verbose)

    @staticmethod
    def connectionConfig_resolve(
        args: argparse.Namespace,
        environ: Mapping[str, str],
        rc_data: Optional[Mapping[str, Any]] = None,
    ) -> ConnectionConfig:
        """
        Resolve the immutable connection configuration

        Args:
            args: Parsed command-line flags
            environ: Process environment mapping
            rc_data: Settings from the `--config` file

        Returns:
            ConnectionConfig with a concrete host and validated port

        Raises:
            UsageError: If no file argument was given
            ConfigError: If the port, host or a pass-through flag is invalid
        """
        rc_data = rc_data or {}
        verbose: bool = bool(args.verbose)

        if not args.files:
            raise UsageError("No file argument given")
        file_argument: str = args.files[0]
        if len(args.files) > 1 and verbose:
            logger.info("Ignoring extra file arguments: %s", " ".join(args.files[1:]))

        host = ConfigLoader.setting_pick(
            args.host, environ, HOST_ENV, rc_data.get("host"), DEFAULT_HOST
        )
        port_str = ConfigLoader.setting_pick(
            args.port, environ, PORT_ENV, rc_data.get("port"), DEFAULT_PORT
        )

        # Port is validated before host detection so a bad port never reaches SSH detection
        port = ConfigLoader.port_parse(port_str)
        host = ConfigLoader.host_resolve(host, environ, verbose)

        config = ConnectionConfig(
            host=host,
            port=port,
            file_argument=file_argument,
            wait=bool(args.wait),
            force=bool(args.force),
            verbose=verbose,
            line=ConfigLoader.optional_validate("--line", args.line),
            display_type=ConfigLoader.optional_validate("--type", args.type),
            display_name=ConfigLoader.optional_validate("--name", args.name),
        )
        if verbose:
            logger.info("Resolved connection %s:%s", config.host, config.port)
        return config
