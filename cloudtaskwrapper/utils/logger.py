"""
Structured logging configuration using loguru.

Importing this module leaves existing sinks alone. Applications that want
the package's JSON or text output call setup_logging() themselves.
"""
import sys
import json
from loguru import logger
from cloudtaskwrapper.config import settings


log = logger


def serialize(record):
    """Serialize log record to JSON format."""
    subset = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "module": record["module"],
        "function": record["function"],
        "line": record["line"],
    }
    
    if record["extra"]:
        subset["extra"] = record["extra"]
    
    if record["exception"]:
        subset["exception"] = {
            "type": record["exception"].type.__name__,
            "value": str(record["exception"].value),
        }
    
    return json.dumps(subset, default=str)


def json_sink(message):
    """Write JSON lines to stderr."""
    sys.stderr.write(serialize(message.record) + "\n")


def setup_logging():
    """
    Configure loguru logger based on settings.
    
    Replaces all existing sinks, so only applications should call it.
    
    Returns:
        The configured logger
    """
    logger.remove()
    
    if settings.log_format == "json":
        logger.add(json_sink, level=settings.log_level)
    else:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
            level=settings.log_level,
            colorize=True,
        )
    
    if settings.log_file:
        logger.add(
            settings.log_file,
            rotation="00:00",
            retention="30 days",
            compression="zip",
            level=settings.log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        )
    
    return logger
