import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, List
import yaml

from utils.logger import setup_logger

logger = setup_logger(__name__)

_ENV_PATTERN = re.compile(r'\$\{([^}:]+)(?::-([^}]*))?\}')


class ConfigurationError(Exception):
    pass


class ConfigLoader:
    def __init__(self, config_path: Optional[Path] = None):
        if config_path is None:
            config_path = Path(__file__).resolve().parent / "config.yaml"

        self.config_path = Path(config_path)
        self._config: Optional[Dict[str, Any]] = None
        self._mtime: Optional[float] = None

    def load(self, force_reload: bool = False) -> Dict[str, Any]:
        if not self.config_path.exists():
            raise ConfigurationError(f"config file not found: {self.config_path}")

        mtime = self.config_path.stat().st_mtime
        if not force_reload and self._config is not None and self._mtime == mtime:
            return self._config

        logger.info(
            "Loading configuration from file",
            extra={"config_path": str(self.config_path)}
        )

        with open(self.config_path, "r") as f:
            raw = yaml.safe_load(f)

        if raw is None:
            raise ConfigurationError("config file is empty")
        if not isinstance(raw, dict):
            raise ConfigurationError("config root must be a mapping")

        self._config = self._interpolate(raw)
        self._mtime = mtime
        return self._config

    def _interpolate(self, node: Any) -> Any:
        if isinstance(node, dict):
            return {key: self._interpolate(value) for key, value in node.items()}
        if isinstance(node, list):
            return [self._interpolate(item) for item in node]
        if isinstance(node, str):
            return _ENV_PATTERN.sub(self._env_value, node)
        return node

    @staticmethod
    def _env_value(match: "re.Match[str]") -> str:
        name, default = match.group(1), match.group(2)
        value = os.getenv(name)
        if value is not None:
            return value
        if default is not None:
            return default

        logger.warning(
            f"Environment variable not found: {name}",
            extra={"env_var": name}
        )
        return match.group(0)

    def get(self, path: str, default: Any = None) -> Any:
        current: Any = self.load()
        for key in path.split('.'):
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    def reload(self) -> Dict[str, Any]:
        logger.info("Reloading configuration")
        return self.load(force_reload=True)


def _positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


class ConfigValidator:
    @staticmethod
    def validate_server_config(config: Dict[str, Any]) -> List[str]:
        errors = []

        port = config.get('server', {}).get('port')
        if not _positive_int(port) or port > 65535:
            errors.append(f"invalid port: {port}")

        return errors

    @staticmethod
    def validate_recommendation_config(config: Dict[str, Any]) -> List[str]:
        errors = []

        rec = config.get('recommendation', {})

        for mode in ('shop', 'food'):
            window = rec.get(mode, {}).get('history_window')
            if not _positive_int(window):
                errors.append(f"invalid {mode}.history_window: {window}")

        default_limit = rec.get('default_limit')
        max_limit = rec.get('max_limit')
        if not _positive_int(max_limit):
            errors.append(f"invalid max_limit: {max_limit}")
        if not _positive_int(default_limit):
            errors.append(f"invalid default_limit: {default_limit}")
        elif _positive_int(max_limit) and default_limit > max_limit:
            errors.append(f"default_limit {default_limit} exceeds max_limit {max_limit}")

        return errors

    @staticmethod
    def validate_observability_config(config: Dict[str, Any]) -> List[str]:
        errors = []

        level = config.get('observability', {}).get('log_level', 'INFO')
        if str(level).upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            errors.append(f"invalid log_level: {level}")

        return errors

    @staticmethod
    def validate(config: Dict[str, Any]) -> List[str]:
        all_errors = []

        all_errors.extend(ConfigValidator.validate_server_config(config))
        all_errors.extend(ConfigValidator.validate_recommendation_config(config))
        all_errors.extend(ConfigValidator.validate_observability_config(config))

        return all_errors


config_loader: Optional[ConfigLoader] = None


def init_config_loader(config_path: Optional[Path] = None) -> ConfigLoader:
    global config_loader
    loader = ConfigLoader(config_path=config_path)

    validation_errors = ConfigValidator.validate(loader.load())
    if validation_errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {err}" for err in validation_errors)
        logger.error(error_msg)
        raise ConfigurationError(error_msg)

    logger.info("Configuration validated successfully")
    config_loader = loader
    return config_loader


def get_config_loader() -> ConfigLoader:
    if config_loader is None:
        raise ConfigurationError("config loader not initialized. Call init_config_loader() first")
    return config_loader
