import logging
from logging.handlers import RotatingFileHandler
import os
import sys
import traceback
from typing import Any, Dict


def interaction_details(interaction: Any) -> Dict[str, Any]:
    """Who clicked or ran what, for correlating a failure with a review card."""

    data = getattr(interaction, "data", None) or {}
    command = getattr(interaction, "command", None)
    details = {
        "user": getattr(getattr(interaction, "user", None), "id", None),
        "channel": getattr(interaction, "channel_id", None),
        "command": getattr(command, "qualified_name", None),
        "custom_id": data.get("custom_id") if isinstance(data, dict) else None,
    }
    return {key: value for key, value in details.items() if value is not None}


def message_details(message: Any) -> Dict[str, Any]:
    details = {
        "message": getattr(message, "id", None),
        "webhook": getattr(message, "webhook_id", None),
        "channel": getattr(getattr(message, "channel", None), "id", None),
    }
    return {key: value for key, value in details.items() if value is not None}


class ErrorEngine:
    """Persists unexpected handler failures to a rotating log file."""

    def __init__(self, log_file: str = "logs/leaderboard_errors.log"):
        self.logger = logging.getLogger("LeaderboardErrorEngine")
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        # Constructed once per cog; avoid stacking file handlers.
        abs_path = os.path.abspath(log_file)
        has_handler = any(
            isinstance(h, RotatingFileHandler)
            and getattr(h, "baseFilename", None) == abs_path
            for h in self.logger.handlers
        )
        if not has_handler:
            handler = RotatingFileHandler(abs_path, maxBytes=1_000_000, backupCount=5)
            formatter = logging.Formatter('%(asctime)s %(levelname)s %(message)s')
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        self.logger.setLevel(logging.ERROR)

    def log_exception(self, exc: BaseException, context: str = "", details: Dict[str, Any] | None = None):
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        suffix = " ".join(f"{key}={value}" for key, value in (details or {}).items())
        where = f"{context} [{suffix}]" if suffix else context
        self.logger.error(f"Exception in {where}: {type(exc).__name__}: {exc}\n{tb}")
        print(f"[LeaderboardBot Error] {type(exc).__name__}: {exc} in {where}", file=sys.stderr)

    def log_interaction_exception(self, exc: BaseException, interaction: Any, context: str = ""):
        self.log_exception(exc, context=context, details=interaction_details(interaction))

    def log_message_exception(self, exc: BaseException, message: Any, context: str = ""):
        self.log_exception(exc, context=context, details=message_details(message))

    def catch_uncaught(self):
        def handle_exception(exc_type, exc_value, exc_traceback):
            if issubclass(exc_type, KeyboardInterrupt):
                sys.__excepthook__(exc_type, exc_value, exc_traceback)
                return
            self.log_exception(exc_value, context="Uncaught Exception")
        sys.excepthook = handle_exception
