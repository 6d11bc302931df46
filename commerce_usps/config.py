"""Provider configuration: Pydantic schema plus YAML loader.

Loads config from (priority order):
1. explicit path argument
2. ./commerce_usps.yaml (working directory)
3. ~/.commerce_usps/config.yaml (user home)

Environment variables override YAML: COMMERCE_USPS_<SECTION>_<KEY>.
${VAR} references in YAML values resolve from environment at load time.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from commerce_usps.services.usps_service_codes import is_known_service_class

logger = logging.getLogger(__name__)

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

ENV_PREFIX = "COMMERCE_USPS_"


def resolve_env_vars(value: str) -> str:
    """Resolve ${VAR} references in a string from environment variables.

    Args:
        value: String potentially containing ${VAR} references.

    Returns:
        String with all ${VAR} references replaced by their env values.
        Missing env vars resolve to empty string.
    """
    def _replace(match: re.Match) -> str:
        return os.environ.get(match.group(1), "")

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    """Recursively resolve ${VAR} references in a nested data structure."""
    if isinstance(data, str):
        return resolve_env_vars(data)
    elif isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    return data


class ApiInformation(BaseModel):
    """USPS Web Tools credentials and endpoint mode.

    The password is kept for forward compatibility; the RateV4 call
    authenticates with the user ID alone.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    user_id: str = ""
    password: str = ""
    mode: Literal["test", "live"] = "test"


class LogOptions(BaseModel):
    """Diagnostic tracing of USPS traffic."""

    model_config = ConfigDict(frozen=True)

    request: bool = False
    response: bool = False


class Options(BaseModel):
    """Additional USPS options."""

    model_config = ConfigDict(frozen=True)

    log: LogOptions = LogOptions()

    @field_validator("log", mode="before")
    @classmethod
    def _checkbox_list_to_flags(cls, value: Any) -> Any:
        """Accept checkbox style ``["request"]`` or ``{"request": "request", "response": 0}``."""
        if isinstance(value, (list, tuple, set)):
            return {name: True for name in value if name}
        if isinstance(value, dict):
            return {k: bool(v) for k, v in value.items()}
        return value


class Conditions(BaseModel):
    """Rate conditions; ``conditions`` lists the excluded service CLASSIDs."""

    model_config = ConfigDict(frozen=True)

    conditions: tuple[str, ...] = ()

    @field_validator("conditions", mode="before")
    @classmethod
    def _normalize_codes(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, dict):
            # Checkbox form: {code: code} for checked, {code: 0} for unchecked
            value = [k for k, v in value.items() if v]
        if isinstance(value, (str, int)):
            value = [value]
        codes = tuple(str(code).strip() for code in value if str(code).strip())
        for code in codes:
            if not is_known_service_class(code):
                logger.warning("Excluded USPS service class %r is not a known CLASSID", code)
        return codes


class ProviderConfig(BaseModel):
    """Top-level configuration for the USPS shipping method."""

    model_config = ConfigDict(frozen=True)

    api_information: ApiInformation = ApiInformation()
    options: Options = Options()
    conditions: Conditions = Conditions()

    @property
    def is_test_mode(self) -> bool:
        """True when requests should go to the USPS test endpoint."""
        return self.api_information.mode == "test"

    @property
    def excluded_services(self) -> frozenset[str]:
        """Service CLASSIDs dropped from every quote."""
        return frozenset(self.conditions.conditions)

    def is_configured(self) -> bool:
        """Determine if there is the minimum information to connect to USPS."""
        return bool(self.api_information.user_id and self.api_information.password)


def default_configuration() -> dict[str, Any]:
    """Return the default configuration as a plain mapping."""
    return ProviderConfig().model_dump()


def _find_config_file() -> Path | None:
    """Search for config file in standard locations.

    Returns:
        Path to config file if found, None otherwise.
    """
    candidates = [
        Path.cwd() / "commerce_usps.yaml",
        Path.cwd() / "commerce_usps.yml",
        Path.home() / ".commerce_usps" / "config.yaml",
        Path.home() / ".commerce_usps" / "config.yml",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def _coerce_env_value(value: str) -> Any:
    """Coerce an env override to bool or keep it as string."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply COMMERCE_USPS_<SECTION>_<KEY> env var overrides to config data.

    Matches section names by longest prefix so ``api_information`` is
    handled correctly. For example, ``COMMERCE_USPS_API_INFORMATION_MODE``
    maps to section ``api_information``, field ``mode``. The nested log
    flags use ``COMMERCE_USPS_OPTIONS_LOG_REQUEST``; excluded services
    take a comma-separated ``COMMERCE_USPS_CONDITIONS_CONDITIONS``.

    Args:
        data: Parsed YAML config dict.

    Returns:
        Config dict with env var overrides applied.
    """
    known_sections = sorted(
        ProviderConfig.model_fields.keys(), key=len, reverse=True
    )
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        suffix = key[len(ENV_PREFIX):].lower()
        matched_section = None
        matched_field = None
        for section in known_sections:
            section_prefix = section + "_"
            if suffix.startswith(section_prefix):
                matched_section = section
                matched_field = suffix[len(section_prefix):]
                break
        if matched_section is None or not matched_field:
            continue

        section_data = data.setdefault(matched_section, {})
        if not isinstance(section_data, dict):
            continue

        if matched_section == "options" and matched_field.startswith("log_"):
            log_data = section_data.get("log")
            if not isinstance(log_data, dict):
                log_data = {name: True for name in (log_data or [])}
            log_data[matched_field[len("log_"):]] = _coerce_env_value(value)
            section_data["log"] = log_data
        elif matched_section == "conditions" and matched_field == "conditions":
            section_data["conditions"] = [
                code.strip() for code in value.split(",") if code.strip()
            ]
        else:
            section_data[matched_field] = _coerce_env_value(value)
    return data


def load_config(config_path: str | None = None) -> ProviderConfig | None:
    """Load provider configuration from YAML file with env var resolution.

    Args:
        config_path: Explicit path to config file. If None, searches
            standard locations (cwd, then ~/.commerce_usps/).

    Returns:
        Parsed and validated ProviderConfig, or None if no config found.

    Raises:
        FileNotFoundError: If config_path is given but does not exist.
    """
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        path = _find_config_file()
        if path is None:
            return None

    logger.info("Loading USPS config from %s", path)

    with open(path) as f:
        raw_data = yaml.safe_load(f) or {}

    data = _resolve_env_vars_recursive(raw_data)
    data = _apply_env_overrides(data)

    return ProviderConfig(**data)
