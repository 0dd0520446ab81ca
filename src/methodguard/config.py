"""Plugin and application configuration.

Both configs are frozen dataclasses — immutable after creation,
IDE-autocompletable, no string-key dict lookups at request time.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from methodguard.errors import ConfigurationError

DEFAULT_METHODS: tuple[str, ...] = ("get", "post", "delete", "put", "patch", "options", "trace")

# Wire option name -> GuardConfig field
_OPTION_ALIASES: dict[str, str] = {
    "methodsToSupport": "methods_to_support",
    "log": "log",
    "setAllowHeader": "set_allow_header",
    "allowHeadWithGet": "allow_head_with_get",
}

_FLAGS = ("log", "set_allow_header", "allow_head_with_get")


@dataclass(frozen=True, slots=True)
class GuardConfig:
    """Options for the method guard plugin. Immutable after creation.

    ``methods_to_support`` is the universe of methods a path can be
    missing; entries are lowercased and deduplicated on construction::

        config = GuardConfig(methods_to_support=("GET", "POST", "get"), set_allow_header=True)
        config.methods_to_support  # ("get", "post")

    ``log`` echoes the coverage scan to stderr, one ``| ``-prefixed line
    per event.
    """

    methods_to_support: tuple[str, ...] = DEFAULT_METHODS
    log: bool = False
    set_allow_header: bool = False
    allow_head_with_get: bool = False

    def __post_init__(self) -> None:
        # Repeats would leave an observed method in the unsupported list
        normalized = tuple(dict.fromkeys(method.lower() for method in self.methods_to_support))
        object.__setattr__(self, "methods_to_support", normalized)

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | GuardConfig | None = None) -> GuardConfig:
        """Validate a plain options mapping and build a config.

        Accepts the camelCase option names (``methodsToSupport``,
        ``setAllowHeader``, ...) as well as the field names. Raises
        ``ConfigurationError`` for unknown keys or values of the wrong
        shape so that a bad registration fails at startup.
        """
        if options is None:
            return cls()
        if isinstance(options, GuardConfig):
            return options
        if not isinstance(options, Mapping):
            msg = f"Plugin options must be a mapping, got {type(options).__name__}."
            raise ConfigurationError(msg)

        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                msg = f"Unknown option {key!r}. Valid options: {', '.join(_OPTION_ALIASES)}."
                raise ConfigurationError(msg)
            if name in values:
                msg = f"Option {key!r} given more than once."
                raise ConfigurationError(msg)
            values[name] = value

        for flag in _FLAGS:
            if flag in values and not isinstance(values[flag], bool):
                msg = f"Option {flag!r} must be a boolean, got {type(values[flag]).__name__}."
                raise ConfigurationError(msg)

        if "methods_to_support" in values:
            values["methods_to_support"] = _validate_methods(values["methods_to_support"])

        return cls(**values)


def _validate_methods(methods: Any) -> tuple[str, ...]:
    if not isinstance(methods, (list, tuple)):
        msg = f"'methodsToSupport' must be a list of method names, got {type(methods).__name__}."
        raise ConfigurationError(msg)
    for method in methods:
        if not isinstance(method, str) or not method.strip():
            msg = f"'methodsToSupport' entries must be non-empty strings, got {method!r}."
            raise ConfigurationError(msg)
    return tuple(methods)


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Host application configuration. Immutable after creation.

    ``route_prefix`` namespaces every route registered on the app and
    is the default prefix handed to plugins::

        config = AppConfig(route_prefix="/api")
    """

    debug: bool = False
    route_prefix: str = ""

    def __post_init__(self) -> None:
        prefix = self.route_prefix
        if prefix and (not prefix.startswith("/") or prefix.endswith("/")):
            msg = f"route_prefix must start with '/' and not end with '/', got {prefix!r}."
            raise ConfigurationError(msg)
