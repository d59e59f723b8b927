"""
Logger de eventos de integração (OAuth, tokens e sincronização)
"""
import json
import logging
import os
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

from mlhub.config.settings import settings

logger = logging.getLogger(__name__)


class ActivityLogger:
    """Grava eventos de integração em arquivo, uma linha JSON por evento"""

    def __init__(self, log_dir: Optional[str] = None, filename: str = "activity.log"):
        self.log_dir = log_dir or settings.log_dir
        self.filename = filename
        self._file_logger = None

    def _get_file_logger(self) -> logging.Logger:
        if self._file_logger is None:
            os.makedirs(self.log_dir, exist_ok=True)
            file_logger = logging.getLogger("mlhub.activity")
            file_logger.setLevel(logging.INFO)
            file_logger.propagate = False
            if not file_logger.handlers:
                handler = RotatingFileHandler(
                    os.path.join(self.log_dir, self.filename),
                    maxBytes=5 * 1024 * 1024,
                    backupCount=5,
                    encoding="utf-8",
                )
                handler.setFormatter(logging.Formatter("%(message)s"))
                file_logger.addHandler(handler)
            self._file_logger = file_logger
        return self._file_logger

    def log(self, event: str, organization_id: Optional[int] = None, ml_account_id: Optional[int] = None,
            level: str = "info", **detail):
        entry = {
            "timestamp": datetime.utcnow().isoformat(),
            "event": event,
            "level": level,
            "organization_id": organization_id,
            "ml_account_id": ml_account_id,
            "detail": detail,
        }
        getattr(logger, level if level in ("debug", "info", "warning", "error") else "info")(
            f"[{event}] org={organization_id} account={ml_account_id} {detail}"
        )
        try:
            self._get_file_logger().info(json.dumps(entry, default=str, ensure_ascii=False))
        except OSError as e:
            logger.warning(f"Não foi possível gravar o log de atividades: {e}")


# Instância global
activity_logger = ActivityLogger()
