"""Configuration validation utilities."""

import math
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool) and value > 0


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_engine_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate caller-facing engine parameters."""
        errors = []

        # Validate risk_free_rate
        if "risk_free_rate" in params:
            value = params["risk_free_rate"]
            if not _is_number(value) or value <= -1:
                errors.append(ValidationError(
                    field="risk_free_rate",
                    message="Must be a finite number greater than -1",
                    value=value
                ))

        # Validate max_position_size
        if "max_position_size" in params:
            value = params["max_position_size"]
            if not _is_number(value) or value <= 0 or value > 1:
                errors.append(ValidationError(
                    field="max_position_size",
                    message="Must be a positive number between 0 and 1",
                    value=value
                ))

        # Validate exit thresholds
        for field in ("stop_loss_percent", "take_profit_percent"):
            if field in params:
                value = params[field]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=field,
                        message="Must be a positive number",
                        value=value
                    ))

        for field in ("lookback_period", "monte_carlo_simulations", "min_history"):
            if field in params:
                value = params[field]
                if not _is_positive_int(value):
                    errors.append(ValidationError(
                        field=field,
                        message="Must be a positive integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_volatility_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate volatility estimation parameters."""
        errors = []

        if "fallback_volatility" in params:
            value = params["fallback_volatility"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="fallback_volatility",
                    message="Must be a non-negative number",
                    value=value
                ))

        # Bessel's correction needs at least two samples
        if "min_returns" in params:
            value = params["min_returns"]
            if not _is_positive_int(value) or value < 2:
                errors.append(ValidationError(
                    field="min_returns",
                    message="Must be an integer of at least 2",
                    value=value
                ))

        if "trading_days_per_year" in params:
            value = params["trading_days_per_year"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="trading_days_per_year",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_simulation_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate Monte Carlo simulation parameters."""
        errors = []

        for field in ("horizon_days", "drift_window", "trading_days_per_year",
                      "chunk_size", "max_workers"):
            if field in params:
                value = params[field]
                if not _is_positive_int(value):
                    errors.append(ValidationError(
                        field=field,
                        message="Must be a positive integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_option_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate option valuation parameters."""
        errors = []

        for field in ("expiry_days", "days_per_year"):
            if field in params:
                value = params[field]
                if not _is_positive_int(value):
                    errors.append(ValidationError(
                        field=field,
                        message="Must be a positive integer",
                        value=value
                    ))

        if "moneyness_offset" in params:
            value = params["moneyness_offset"]
            if not _is_number(value) or value <= 0 or value >= 1:
                errors.append(ValidationError(
                    field="moneyness_offset",
                    message="Must be a positive number below 1",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_signal_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate decision fusion thresholds."""
        errors = []

        for field, value in params.items():
            if field == "confidence_saturation":
                if not _is_positive_int(value):
                    errors.append(ValidationError(
                        field=field,
                        message="Must be a positive integer",
                        value=value
                    ))
            elif not _is_number(value):
                errors.append(ValidationError(
                    field=field,
                    message="Must be a finite number",
                    value=value
                ))

        if "strength_scale" in params:
            value = params["strength_scale"]
            if _is_number(value) and value <= 0:
                errors.append(ValidationError(
                    field="strength_scale",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "engine" in config:
            errors.extend(ConfigValidator.validate_engine_params(config["engine"]))

        if "volatility" in config:
            errors.extend(ConfigValidator.validate_volatility_params(config["volatility"]))

        if "simulation" in config:
            errors.extend(ConfigValidator.validate_simulation_params(config["simulation"]))

        if "options" in config:
            errors.extend(ConfigValidator.validate_option_params(config["options"]))

        if "signal" in config:
            errors.extend(ConfigValidator.validate_signal_params(config["signal"]))

        return errors
