"""Configuration management for dbtasks."""

import os
import re
import json
import logging
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass, field


IgnorePattern = Union[str, re.Pattern]


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings for a single file-backed database."""

    database: str
    adapter: str = 'sqlite3'
    env_name: str = 'development'
    name: str = 'primary'
    timeout: float = 5.0
    pragmas: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'adapter': self.adapter,
            'database': self.database,
            'timeout': self.timeout,
            'pragmas': dict(self.pragmas),
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        env_name: str = 'development',
        name: str = 'primary',
    ) -> 'DatabaseConfig':
        """Create config from dictionary."""
        if 'database' not in data:
            raise ValueError(f"Database config {env_name}.{name} has no 'database' key")
        return cls(
            database=str(data['database']),
            adapter=data.get('adapter', 'sqlite3'),
            env_name=env_name,
            name=name,
            timeout=float(data.get('timeout', 5.0)),
            pragmas=dict(data.get('pragmas') or {}),
        )


def _load_pattern(value: str) -> IgnorePattern:
    # "/regex/" in a config file means a regular expression
    if len(value) >= 2 and value.startswith('/') and value.endswith('/'):
        return re.compile(value[1:-1])
    return value


def _dump_pattern(pattern: IgnorePattern) -> str:
    if isinstance(pattern, re.Pattern):
        return f"/{pattern.pattern}/"
    return pattern


@dataclass
class SchemaDumpConfig:
    """Schema dump configuration."""

    ignore_tables: List[IgnorePattern] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'ignore_tables': [_dump_pattern(p) for p in self.ignore_tables],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SchemaDumpConfig':
        """Create config from dictionary."""
        return cls(
            ignore_tables=[_load_pattern(str(p)) for p in data.get('ignore_tables', [])],
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = 'INFO'
    format: str = '%(asctime)s %(levelname)-8s [%(name)s] %(message)s'

    def apply(self) -> None:
        """Configure the root handler and the dbtasks logger level."""
        logging.basicConfig(format=self.format, datefmt='%H:%M:%S')
        logging.getLogger('dbtasks').setLevel(self.log_level.upper())

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'log_level': self.log_level,
            'format': self.format,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LoggingConfig':
        """Create config from dictionary."""
        defaults = cls()
        return cls(
            log_level=data.get('log_level', defaults.log_level),
            format=data.get('format', defaults.format),
        )


Flags = Union[List[str], Dict[str, List[str]], None]


class TasksConfig:
    """Main dbtasks configuration."""
    
    # Default config file locations (in priority order)
    CONFIG_SEARCH_PATHS = [
        './dbtasks.yaml',
        './dbtasks.json',
        './config/database.yml',
        '~/.dbtasks/config.yaml',
        '~/.dbtasks/config.json',
    ]
    
    def __init__(
        self,
        root: Optional[str] = None,
        databases: Optional[Dict[str, Dict[str, DatabaseConfig]]] = None,
        schema_dump: Optional[SchemaDumpConfig] = None,
        structure_dump_flags: Flags = None,
        structure_load_flags: Flags = None,
        logging_config: Optional[LoggingConfig] = None,
    ):
        """
        Initialize dbtasks configuration.
        
        Args:
            root: Directory that relative database paths are resolved against
            databases: Database configs keyed by environment, then config name
            schema_dump: Schema dump configuration
            structure_dump_flags: Extra sqlite3 flags for dumps, as a list or keyed by adapter
            structure_load_flags: Extra sqlite3 flags for loads, as a list or keyed by adapter
            logging_config: Logging configuration
        """
        self.root = root
        self.databases = databases or {}
        self.schema_dump = schema_dump or SchemaDumpConfig()
        self.structure_dump_flags = structure_dump_flags
        self.structure_load_flags = structure_load_flags
        self.logging = logging_config or LoggingConfig()
    
    @classmethod
    def load(cls, config_path: Optional[str] = None) -> 'TasksConfig':
        """
        Load configuration from file.
        
        Search order:
        1. Explicit config_path parameter
        2. DBTASKS_CONFIG_PATH environment variable
        3. Default search paths (project, user home)
        
        Args:
            config_path: Optional explicit path to config file
            
        Returns:
            TasksConfig instance
        """
        if config_path:
            return cls._load_from_file(config_path)
        
        env_path = os.getenv('DBTASKS_CONFIG_PATH')
        if env_path and Path(env_path).exists():
            return cls._load_from_file(env_path)
        
        for path_str in cls.CONFIG_SEARCH_PATHS:
            path = Path(path_str).expanduser()
            if path.exists():
                return cls._load_from_file(str(path))
        
        return cls()
    
    @classmethod
    def _load_from_file(cls, filepath: str) -> 'TasksConfig':
        """Load configuration from a specific file."""
        path = Path(filepath)
        
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")
        
        with open(path, 'r') as f:
            content = f.read()
        
        if path.suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(content)
        elif path.suffix == '.json':
            data = json.loads(content)
        else:
            raise ValueError(f"Unsupported config format: {path.suffix}")
        
        return cls.from_dict(data or {})
    
    @staticmethod
    def _databases_from_dict(data: Dict[str, Any]) -> Dict[str, Dict[str, DatabaseConfig]]:
        databases: Dict[str, Dict[str, DatabaseConfig]] = {}
        for env_name, env_data in data.items():
            env_data = env_data or {}
            # A bare mapping with a 'database' key is the env's primary config
            if 'database' in env_data:
                env_data = {'primary': env_data}
            databases[env_name] = {
                name: DatabaseConfig.from_dict(entry, env_name=env_name, name=name)
                for name, entry in env_data.items()
            }
        return databases
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TasksConfig':
        """Create config from dictionary."""
        return cls(
            root=data.get('root'),
            databases=cls._databases_from_dict(data.get('databases', {})),
            schema_dump=SchemaDumpConfig.from_dict(data.get('schema_dump', {})),
            structure_dump_flags=data.get('structure_dump_flags'),
            structure_load_flags=data.get('structure_load_flags'),
            logging_config=LoggingConfig.from_dict(data.get('logging', {})),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'root': self.root,
            'databases': {
                env_name: {name: cfg.to_dict() for name, cfg in configs.items()}
                for env_name, configs in self.databases.items()
            },
            'schema_dump': self.schema_dump.to_dict(),
            'structure_dump_flags': self.structure_dump_flags,
            'structure_load_flags': self.structure_load_flags,
            'logging': self.logging.to_dict(),
        }
    
    def configs_for(self, env_name: str) -> List[DatabaseConfig]:
        """Return every database config of an environment."""
        return list(self.databases.get(env_name, {}).values())
    
    def find_db_config(self, env_name: str, name: str = 'primary') -> Optional[DatabaseConfig]:
        """Return one database config, or None if it is not configured."""
        return self.databases.get(env_name, {}).get(name)
    
    def save(self, filepath: str) -> None:
        """
        Save configuration to file.
        
        Args:
            filepath: Path to save config file
        """
        path = Path(filepath)
        data = self.to_dict()
        
        if path.suffix in ['.yaml', '.yml']:
            with open(path, 'w') as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        elif path.suffix == '.json':
            with open(path, 'w') as f:
                json.dump(data, f, indent=2)
        else:
            raise ValueError(f"Unsupported config format: {path.suffix}")


# Global default configuration instance
_default_config: Optional[TasksConfig] = None


def get_default_config() -> TasksConfig:
    """
    Get the default configuration instance.
    
    Lazily loads configuration on first access.
    
    Returns:
        TasksConfig instance
    """
    global _default_config
    if _default_config is None:
        _default_config = TasksConfig.load()
    return _default_config


def set_default_config(config: Optional[TasksConfig]) -> None:
    """
    Set the default configuration instance.
    
    Args:
        config: TasksConfig to use as default, or None to reload on next access
    """
    global _default_config
    _default_config = config


def default_root() -> Path:
    """
    Directory relative database paths resolve against by default.
    
    Returns:
        The default configuration's root, or the current working
        directory when none is configured
    """
    root = get_default_config().root
    return Path(root) if root else Path.cwd()
