"""Configuration management for logweave.

Settings are read with Dynaconf from, in increasing priority:
- built-in defaults (validators below)
- settings.yaml and .secrets.yaml, or the files given explicitly
- environment variables prefixed with LOGWEAVE_ (e.g. LOGWEAVE_PROCESSING__MAX_WORKERS)

The ``scheme`` and ``sources`` sections are validated with the pydantic
models in :mod:`logweave.models.config`.
"""

from typing import Any, Dict, List, Optional

from dynaconf import Dynaconf, Validator, ValidationError as DynaconfValidationError
from pydantic import ValidationError

from logweave.core.errors import ConfigError
from logweave.models import Scheme, SourceConfig, TransportSettings, UnmatchedPolicy

DEFAULT_SETTINGS_FILES = ['settings.yaml', '.secrets.yaml']

VALIDATORS = [
    # Logging
    Validator('logging.level', default="INFO", is_type_of=str),
    Validator('logging.json_logs', default=False, is_type_of=bool),
    Validator('logging.enable_debug', default=False, is_type_of=bool),

    # Processing - sources collected in parallel
    Validator('processing.max_workers', default=4, is_type_of=int, gte=1),

    # Transport - every command gets a timeout
    Validator('transport.timeout_seconds', default=30.0, is_type_of=(int, float), gt=0),
    Validator('transport.connect_timeout_seconds', default=10, is_type_of=int, gt=0),
    Validator('transport.known_hosts_file', default=None),
    Validator('transport.fail_on_nonzero_exit', default=True, is_type_of=bool),
    Validator('transport.decode_errors', default="replace", is_in=["replace", "strict"]),

    # Ingest - handling of entries that do not match the scheme
    Validator('ingest.unmatched_policy', default="append", is_in=[p.value for p in UnmatchedPolicy]),
]

def load_settings(settings_files: Optional[List[str]] = None) -> Dynaconf:
    """Load and validate settings.

    Args:
        settings_files: Optional list of settings files to load

    Returns:
        Validated Dynaconf settings

    Raises:
        ConfigError: If the settings are invalid
    """
    try:
        settings = Dynaconf(
            envvar_prefix="LOGWEAVE",
            settings_files=settings_files or DEFAULT_SETTINGS_FILES,
            load_dotenv=True,
            validators=VALIDATORS,
        )
        settings.validators.validate()
    except DynaconfValidationError as e:
        raise ConfigError("Configuration validation failed", details={"errors": str(e)}) from e
    return settings

def _section(value: Any) -> Dict[str, Any]:
    if value is None:
        return {}
    if not hasattr(value, "items"):
        raise ConfigError("Configuration section must be a mapping", details={"value": repr(value)})
    return {str(key).lower(): item for key, item in value.items()}

def load_scheme(settings: Dynaconf) -> Scheme:
    """Build the log scheme from the ``scheme`` section.

    Raises:
        ConfigError: If the section does not describe a valid scheme
    """
    try:
        return Scheme(**_section(settings.get("scheme")))
    except ValidationError as e:
        raise ConfigError("Invalid scheme configuration", details={"errors": str(e)}) from e

def load_sources(settings: Dynaconf) -> List[SourceConfig]:
    """Build the source list from the ``sources`` section.

    A single local journal source is used when none are configured.

    Raises:
        ConfigError: If a source entry is invalid or names are not unique
    """
    entries = settings.get("sources") or []
    try:
        sources = [SourceConfig(**_section(entry)) for entry in entries]
    except ValidationError as e:
        raise ConfigError("Invalid source configuration", details={"errors": str(e)}) from e
    if not sources:
        sources = [SourceConfig(name="local")]

    names = [source.name for source in sources]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ConfigError("Source names must be unique", details={"duplicates": duplicates})
    return sources

def load_transport(settings: Dynaconf) -> TransportSettings:
    try:
        return TransportSettings(**_section(settings.get("transport")))
    except ValidationError as e:
        raise ConfigError("Invalid transport configuration", details={"errors": str(e)}) from e

def load_policy(settings: Dynaconf) -> UnmatchedPolicy:
    return UnmatchedPolicy(settings.get("ingest.unmatched_policy"))
