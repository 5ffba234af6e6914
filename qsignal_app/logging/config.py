"""
Logging setup for the QSignal engine.

Every component logs through structlog. Decision and position records are
bound with a `subsystem` key ("signal" / "position") and `audit_trail=True`
so they can be routed or filtered apart from the engine's operational log.
"""
import logging
import sys
from typing import Any, Iterable, Optional, Union

import structlog
from structlog.types import EventDict, FilteringBoundLogger, Processor, WrappedLogger

# Audit records name the component that decided, not the file/line
AUDIT_CALLSITE = (
    structlog.processors.CallsiteParameter.MODULE,
    structlog.processors.CallsiteParameter.FUNC_NAME,
)


def only_subsystems(subsystems: Iterable[str]) -> Processor:
    """
    Processor keeping only records bound to one of `subsystems`.

    Records without a subsystem (engine lifecycle, rejected bars) are
    dropped too, which leaves a pure decision / position audit stream.
    """
    allowed = frozenset(subsystems)

    def processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        if event_dict.get("subsystem") not in allowed:
            raise structlog.DropEvent
        return event_dict

    return processor


def configure_logging(
    level: Union[str, int] = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    subsystems: Optional[Iterable[str]] = None,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the engine.

    Args:
        level: Logging level name or number
        format_json: Render one JSON object per record (for audit sinks)
        include_timestamp: Prefix records with a UTC ISO timestamp
        include_caller: Add the emitting module and function
        subsystems: If given, only records of these subsystems are emitted,
            e.g. {"signal"} for the decision audit trail
        extra_processors: Additional processors run before rendering
    """
    log_level = level if isinstance(level, int) else getattr(logging, level.upper())

    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s")

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]
    if subsystems is not None:
        processors.append(only_subsystems(subsystems))

    processors.extend([
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ])

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(parameters=AUDIT_CALLSITE))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Logger for `name` (usually the module's __name__)."""
    return structlog.get_logger(name)


def get_signal_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for signal decisions.

    Bound with the signal subsystem so every decision record can be
    filtered out of the general engine log as an audit trail.
    """
    logger = get_logger(name)
    return logger.bind(
        subsystem="signal",
        audit_trail=True
    )


def get_position_logger(name: str) -> FilteringBoundLogger:
    """Get a logger for position state transitions."""
    logger = get_logger(name)
    return logger.bind(
        subsystem="position",
        audit_trail=True
    )


def log_signal_decision(
    logger: FilteringBoundLogger,
    action: str,
    buy_strength: float,
    sell_strength: float,
    confidence: float,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a fused trading decision with standardized format.

    Args:
        logger: Structlog logger instance
        action: Decided action value ("buy", "sell" or "hold")
        buy_strength: Buy strength in [0, 1]
        sell_strength: Sell strength in [0, 1]
        confidence: Confidence in [0, 1]
        reason: Which rule produced the decision
        context: Decision inputs (probabilities, option signals, ...)
    """
    bound_logger = logger.bind(
        action=action,
        buy_strength=buy_strength,
        sell_strength=sell_strength,
        confidence=confidence,
        reason=reason,
        event="signal_decision"
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Signal decided")


def log_position_transition(
    logger: FilteringBoundLogger,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a position state transition with standardized format.

    Args:
        logger: Structlog logger instance
        from_state: Current state
        to_state: Target state
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
        event="position_transition"
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Position transition")
