"""
📝 Logging System
Système de logging avec console Rich, fichiers JSON rotatifs et structlog
"""

import logging
import logging.handlers
import json
from typing import Optional, Dict, Any
from datetime import datetime, timezone
import structlog
from rich.logging import RichHandler
from rich.console import Console

from .config import Settings, get_settings

ROOT_LOGGER_NAME = "genetic"

_configured = False

# Processeurs du logger de simulation (structlog.wrap_logger)
SIMULATION_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    structlog.processors.JSONRenderer(default=str),
]


class JSONFormatter(logging.Formatter):
    """Formatter JSON pour les logs structurés"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Ajouter les champs personnalisés
        if hasattr(record, 'extra_data'):
            log_data.update(record.extra_data)

        # Ajouter l'exception si présente
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(settings: Optional[Settings] = None, force: bool = False) -> None:
    """
    Configure le logging du package ``genetic``.

    Args:
        settings: Configuration à utiliser (par défaut: get_settings())
        force: Reconfigure même si le logging est déjà initialisé
    """
    global _configured
    if _configured and not force:
        return

    if settings is None:
        settings = get_settings()

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(getattr(logging, settings.log_level))

    # Console handler avec Rich
    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
        rich_tracebacks=True
    )
    console_handler.setLevel(getattr(logging, settings.log_level))
    if settings.log_json:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    package_logger.addHandler(console_handler)

    if settings.log_to_file:
        settings.logs_dir.mkdir(parents=True, exist_ok=True)

        # File handler général avec rotation
        file_handler = logging.handlers.RotatingFileHandler(
            filename=settings.logs_dir / "genetic.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())

        # Error handler séparé
        error_handler = logging.handlers.RotatingFileHandler(
            filename=settings.logs_dir / "errors.log",
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(JSONFormatter())

        package_logger.addHandler(file_handler)
        package_logger.addHandler(error_handler)

    _configured = True

    package_logger.debug(
        "Logging system initialized",
        extra={"extra_data": {
            "log_level": settings.log_level,
            "log_to_file": settings.log_to_file,
            "environment": settings.environment,
        }},
    )


def _ensure_logging() -> None:
    global _configured
    try:
        setup_logging()
    except (OSError, ValueError) as e:
        # Fallback en cas d'erreur, limité au logger du package
        package_logger = logging.getLogger(ROOT_LOGGER_NAME)
        if not package_logger.handlers:
            fallback_handler = logging.StreamHandler()
            fallback_handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
            package_logger.addHandler(fallback_handler)
            package_logger.setLevel(logging.INFO)
        _configured = True
        package_logger.error(f"Failed to setup advanced logging: {e}")


def get_logger(name: str, extra_data: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """
    Retourne un logger configuré avec des données extra optionnelles

    Args:
        name: Nom du logger (ex: "genetic.simulator")
        extra_data: Données supplémentaires à inclure dans tous les logs

    Returns:
        Logger configuré
    """
    _ensure_logging()
    logger = logging.getLogger(name)

    if extra_data:
        # Créer un adaptateur pour inclure les données extra
        logger = logging.LoggerAdapter(logger, {"extra_data": extra_data})

    return logger


def get_simulation_logger(simulation_id: str) -> "structlog.stdlib.BoundLogger":
    """
    Retourne un logger structlog lié à une simulation

    Args:
        simulation_id: Identifiant de la simulation

    Returns:
        Logger structlog avec le contexte ``simulation_id``
    """
    _ensure_logging()
    return structlog.wrap_logger(
        logging.getLogger(f"{ROOT_LOGGER_NAME}.simulation"),
        processors=SIMULATION_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    ).bind(simulation_id=simulation_id)
