"""Layered INI configuration for DevDiary.

Values are looked up in three layers, highest first:

1. Environment variables named DEVDIARY_<SECTION>_<KEY>
2. The repository file, .devdiary/config
3. The user file, ~/.devdiaryconfig

Known keys:

    color.ui          Colored CLI output (boolean, default true)
    index.duplicates  'keep' every staged entry or let the 'last' one win
"""

import io
import os
import configparser
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple
from devdiary.utils.fs import atomic_write_text
from .errors import InvalidConfigError
from .index import DUPLICATE_POLICIES, KEEP_DUPLICATES

TRUE_VALUES = ('1', 'true', 'yes', 'on', 'always', 'auto')
FALSE_VALUES = ('0', 'false', 'no', 'off', 'never')

ENV_PREFIX = 'DEVDIARY'


def split_key(key: str) -> Tuple[str, str]:
    """Split 'section.option' into its parts; bare keys go to [core]."""
    if '.' not in key:
        return 'core', key
    section, option = key.split('.', 1)
    return section, option


def env_key(section: str, key: str) -> str:
    """Environment variable that overrides section.key."""
    return f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"


def validate_value(section: str, key: str, value: str) -> None:
    """
    Reject values the known keys cannot use; unknown keys pass through.

    Raises:
        InvalidConfigError: If value is not valid for section.key
    """
    name = f"{section}.{key}"
    normalized = value.strip().lower()
    if name == 'color.ui' and normalized not in TRUE_VALUES + FALSE_VALUES:
        raise InvalidConfigError(name, value, "a boolean such as true or false")
    if name == 'index.duplicates' and normalized not in DUPLICATE_POLICIES:
        raise InvalidConfigError(name, value, " or ".join(DUPLICATE_POLICIES))


def _load(path: Optional[Path]) -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    if path is not None and path.exists():
        parser.read(path, encoding='utf-8')
    return parser


class Config:
    """
    Reads and writes DevDiary settings.

    Parsed files are cached on first use; writes go to disk immediately
    and update the cache.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.devdiaryconfig'

    def __init__(self, repo_config_path: Optional[Path] = None,
                 global_config_path: Optional[Path] = None):
        """
        Args:
            repo_config_path: Repository config file, or None outside a repository
            global_config_path: Override for the user config location
        """
        self.repo_config_path = Path(repo_config_path) if repo_config_path else None
        self.global_config_path = Path(global_config_path or self.GLOBAL_CONFIG_PATH)
        self._parsers: Dict[str, configparser.ConfigParser] = {}

    @property
    def global_config(self) -> configparser.ConfigParser:
        if 'global' not in self._parsers:
            self._parsers['global'] = _load(self.global_config_path)
        return self._parsers['global']

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        if self.repo_config_path is None:
            return None
        if 'repo' not in self._parsers:
            self._parsers['repo'] = _load(self.repo_config_path)
        return self._parsers['repo']

    def _file_layers(self) -> Iterator[Tuple[str, configparser.ConfigParser]]:
        """Config files in lookup order."""
        if self.repo_config is not None:
            yield 'repo', self.repo_config
        yield 'global', self.global_config

    def _scope(self, global_config: bool) -> Tuple[configparser.ConfigParser, Path]:
        if global_config:
            return self.global_config, self.global_config_path
        if self.repo_config_path is None:
            raise ValueError("No repository config path available")
        return self.repo_config, self.repo_config_path

    @staticmethod
    def _save(parser: configparser.ConfigParser, path: Path) -> None:
        buffer = io.StringIO()
        parser.write(buffer)
        path.parent.mkdir(parents=True, exist_ok=True)
        atomic_write_text(path, buffer.getvalue())

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Look up section.key, returning fallback when no layer sets it.

        Args:
            section: Config section (e.g., 'color', 'index')
            key: Config key (e.g., 'ui', 'duplicates')
            fallback: Default value if not found
        """
        value = os.environ.get(env_key(section, key))
        if value is not None:
            return value

        for _, parser in self._file_layers():
            if parser.has_option(section, key):
                return parser.get(section, key)

        return fallback

    def get_bool(self, section: str, key: str, fallback: bool = False) -> bool:
        """
        Get a boolean configuration value.

        Raises:
            InvalidConfigError: If the stored value is not a recognised boolean
        """
        value = self.get(section, key)
        if value is None:
            return fallback

        normalized = value.strip().lower()
        if normalized in TRUE_VALUES:
            return True
        if normalized in FALSE_VALUES:
            return False
        raise InvalidConfigError(f"{section}.{key}", value, "a boolean such as true or false")

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Store section.key in the repository file, or the user file if global_config.

        Raises:
            InvalidConfigError: If value is not valid for a known key
            ValueError: If no repository file is available for a local write
        """
        validate_value(section, key, value)
        parser, path = self._scope(global_config)
        if not parser.has_section(section):
            parser.add_section(section)
        parser.set(section, key, value)
        self._save(parser, path)

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Remove section.key from one file.

        Returns:
            True if value was removed, False if it didn't exist
        """
        if not global_config and self.repo_config_path is None:
            return False

        parser, path = self._scope(global_config)
        if not parser.has_option(section, key):
            return False

        parser.remove_option(section, key)
        if not parser.options(section):
            parser.remove_section(section)
        self._save(parser, path)
        return True

    def list_all(self, global_only: bool = False, repo_only: bool = False) -> Dict[str, Dict[str, str]]:
        """
        Collect values from both files as {section: {key: value}}.

        Keys read from the user file are suffixed with ' (global)'.
        """
        result: Dict[str, Dict[str, str]] = {}

        for layer, parser in reversed(list(self._file_layers())):
            if (layer == 'global' and repo_only) or (layer == 'repo' and global_only):
                continue
            suffix = ' (global)' if layer == 'global' else ''
            for section in parser.sections():
                values = result.setdefault(section, {})
                for key, value in parser.items(section):
                    values[f"{key}{suffix}"] = value

        return result

    @property
    def color(self) -> bool:
        """Whether CLI output should be colored (color.ui)."""
        return self.get_bool('color', 'ui', fallback=True)

    @property
    def duplicate_policy(self) -> str:
        """How repeated paths in the index are committed (index.duplicates)."""
        value = self.get('index', 'duplicates', fallback=KEEP_DUPLICATES)
        policy = value.strip().lower()
        if policy not in DUPLICATE_POLICIES:
            raise InvalidConfigError('index.duplicates', value, " or ".join(DUPLICATE_POLICIES))
        return policy


def get_config(repo=None) -> Config:
    """Config for repo, or user-level config only when repo is None."""
    if repo:
        return Config(repo.config_file)
    return Config()
