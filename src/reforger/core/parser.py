"""
Reforger Server - Configuration Parser

Turns untrusted input (a mapping or JSON text) into a validated ServerConfig.

Steps:
1. Decode and deep-copy the input; the caller's object is never touched.
2. Fill absent sections and top-level bindings from the defaults factory.
3. Build the typed model; shape and primitive-type failures become findings.
4. Optionally run the validation engine.

Every failure is reported in ``ParseResult.errors``; nothing is raised.
"""

import copy
import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from reforger.config.constants import DEFAULT_BIND_ADDRESS, DEFAULT_BIND_PORT
from reforger.config.models import ServerConfig
from reforger.core.defaults import (
    create_default_a2s_config,
    create_default_operating_config,
    create_default_rcon_config,
)
from reforger.core.validator import (
    ConfigError,
    ConfigValidator,
    ConfigWarning,
    ErrorKind,
    WarningKind,
)
from reforger.utils.text_utils import mask_secret

logger = logging.getLogger(__name__)

# Sections that may be omitted and are then filled from defaults
_DEFAULTED_SECTIONS = ("a2s", "rcon", "operating")
_SECTIONS = ("game", *_DEFAULTED_SECTIONS)


class ParseResult(BaseModel):
    """Outcome of a parse.

    ``success`` is true exactly when there are no errors, and only then is
    ``config`` set. Warnings never affect success.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    config: ServerConfig | None = None
    errors: list[ConfigError] = Field(default_factory=list)
    warnings: list[ConfigWarning] = Field(default_factory=list)

    @model_validator(mode="after")
    def _consistent(self) -> "ParseResult":
        if self.success != (not self.errors) or self.success != (self.config is not None):
            raise ValueError("success requires a config and no errors")
        return self

    @classmethod
    def failure(
        cls, errors: list[ConfigError], warnings: list[ConfigWarning] | None = None
    ) -> "ParseResult":
        return cls(success=False, errors=errors, warnings=warnings or [])


def _kind_values(kinds: Iterable[Any]) -> set[str]:
    return {k.value if isinstance(k, (ErrorKind, WarningKind)) else str(k) for k in kinds}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _render_path(parts: list[str | int]) -> str:
    path = ""
    for part in parts:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else part
    return path


def _field_path(loc: tuple[Any, ...], data: Any, missing: bool) -> str:
    """Dotted path for a pydantic error location.

    Locations are followed through the input data so that union member tags
    (``bool``, ``list[str]``) which are not real keys are dropped.
    """
    parts: list[str | int] = []
    node = data
    for i, key in enumerate(loc):
        last = i == len(loc) - 1
        if isinstance(node, dict) and isinstance(key, str) and (key in node or (missing and last)):
            parts.append(key)
            node = node.get(key)
        elif isinstance(node, list) and isinstance(key, int) and 0 <= key < len(node):
            parts.append(key)
            node = node[key]
        elif isinstance(node, dict) and key in node:
            parts.append(str(key))
            break
        else:
            break
    if not parts and loc:
        parts.append(str(loc[0]))
    return _render_path(parts)


def _display_value(path: str, value: Any) -> Any:
    if "password" in path.rsplit(".", 1)[-1].lower() and isinstance(value, str):
        return mask_secret(value)
    return value


class Parser:
    """Normalizes and validates raw configuration input"""

    def __init__(self, validator: ConfigValidator | None = None) -> None:
        self.validator = validator or ConfigValidator()

    def parse(
        self,
        raw: Any,
        *,
        validate: bool = True,
        ignore_warnings: Iterable[WarningKind | str] = (),
        ignore_errors: Iterable[ErrorKind | str] = (),
    ) -> ParseResult:
        """
        Parse raw input into a ServerConfig.

        Args:
            raw: Mapping, ServerConfig, or JSON text (str/bytes)
            validate: Run business-rule validation after structural checks
            ignore_warnings: Warning kinds to drop from the result
            ignore_errors: Business-rule error kinds to drop from the result

        Returns:
            ParseResult; never raises for bad input
        """
        data, errors = self._load(raw)
        if errors:
            return ParseResult.failure(errors)

        errors = self._normalize(data)
        if errors:
            logger.warning("Config rejected: %s", ", ".join(e.message for e in errors))
            return ParseResult.failure(errors)

        try:
            config = ServerConfig.model_validate(data)
        except ValidationError as e:
            errors = self._structural_errors(e, data)
            logger.warning("Config has %d structural error(s)", len(errors))
            return ParseResult.failure(errors)

        if not validate:
            return ParseResult(success=True, config=config)

        result = self.validator.validate(config)
        skipped_errors = _kind_values(ignore_errors)
        skipped_warnings = _kind_values(ignore_warnings)
        errors = [e for e in result.errors if e.type.value not in skipped_errors]
        warnings = [w for w in result.warnings if w.type.value not in skipped_warnings]

        if errors:
            return ParseResult.failure(errors, warnings)
        return ParseResult(success=True, config=config, warnings=warnings)

    # ========== Internal ==========

    def _load(self, raw: Any) -> tuple[dict[str, Any], list[ConfigError]]:
        """Decode input into a private dict copy"""
        if isinstance(raw, ServerConfig):
            return raw.to_dict(), []

        if isinstance(raw, (str, bytes, bytearray)):
            try:
                raw = json.loads(raw)
            except (ValueError, RecursionError) as e:
                logger.warning("Config is not valid JSON: %s", e)
                return {}, [ConfigError(type=ErrorKind.INVALID_JSON, message=f"Invalid JSON: {e}")]

        if not isinstance(raw, Mapping):
            return {}, [
                ConfigError(
                    type=ErrorKind.INVALID_STRUCTURE,
                    message="Configuration must be a JSON object",
                    value=type(raw).__name__,
                )
            ]

        return copy.deepcopy(dict(raw)), []

    def _normalize(self, data: dict[str, Any]) -> list[ConfigError]:
        """Check sections and fill the ones that are absent"""
        errors: list[ConfigError] = []

        if data.get("game") is None:
            errors.append(
                ConfigError(
                    type=ErrorKind.MISSING_SECTION,
                    message="Required section 'game' is missing",
                    field="game",
                )
            )

        for section in _SECTIONS:
            value = data.get(section)
            if value is not None and not isinstance(value, Mapping):
                errors.append(
                    ConfigError(
                        type=ErrorKind.INVALID_TYPE,
                        message=f"Section '{section}' must be an object",
                        field=section,
                        value=type(value).__name__,
                    )
                )

        if errors:
            return errors

        data.setdefault("bindAddress", DEFAULT_BIND_ADDRESS)
        data.setdefault("bindPort", DEFAULT_BIND_PORT)
        # A mistyped bind value is reported by the model only; mirror the defaults instead
        base_port = data["bindPort"] if _is_int(data["bindPort"]) else DEFAULT_BIND_PORT
        bind_address = (
            data["bindAddress"] if isinstance(data["bindAddress"], str) else DEFAULT_BIND_ADDRESS
        )
        data.setdefault("publicAddress", bind_address)
        data.setdefault("publicPort", base_port)

        factories = {
            "a2s": lambda: create_default_a2s_config(base_port),
            "rcon": lambda: create_default_rcon_config(base_port),
            "operating": create_default_operating_config,
        }

        filled = []
        for section in _DEFAULTED_SECTIONS:
            if data.get(section) is None:
                data[section] = factories[section]().model_dump(exclude_none=True)
                filled.append(section)

        if filled:
            logger.info("Filled missing section(s) from defaults: %s", ", ".join(filled))
        return errors

    def _structural_errors(self, exc: ValidationError, data: dict[str, Any]) -> list[ConfigError]:
        errors: list[ConfigError] = []
        seen: set[tuple[ErrorKind, str]] = set()

        for err in exc.errors():
            missing = err["type"] == "missing"
            kind = ErrorKind.MISSING_FIELD if missing else ErrorKind.INVALID_TYPE
            path = _field_path(err["loc"], data, missing)
            if (kind, path) in seen:
                continue
            seen.add((kind, path))

            if missing:
                message = f"Required field '{path}' is missing"
                value = None
            else:
                message = f"Field '{path}' has the wrong type: {err['msg']}"
                value = _display_value(path, err.get("input"))

            errors.append(ConfigError(type=kind, message=message, field=path or None, value=value))
        return errors


_default_parser = Parser()


def parse(
    raw: Any,
    *,
    validate: bool = True,
    ignore_warnings: Iterable[WarningKind | str] = (),
    ignore_errors: Iterable[ErrorKind | str] = (),
) -> ParseResult:
    """Parse raw configuration input with the default parser"""
    return _default_parser.parse(
        raw,
        validate=validate,
        ignore_warnings=ignore_warnings,
        ignore_errors=ignore_errors,
    )
