"""
Game Logger Module for Wordle Duel Server

This module provides structured logging for socket events, server replies
and game events (word locked, guesses, wins, role swaps, room teardown).
"""

import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from .helpers import get_connection_identity

# Payload keys whose values must never reach the log files
_SECRET_KEYS = ('word', 'secret')


class GameLogger:
    """
    Centralized logging system for the duel server.

    Features:
    - Socket event tracking with IP/connection identification
    - Server response logging
    - Game event logging
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = logging.getLevelName(level.upper()) if isinstance(level, str) else level

        # Setup main game logger
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Setup the main game logger with file handler."""
        logger = logging.getLogger('wordle_duel')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            logger.handlers.clear()

        # Create log file with date
        log_file = self.log_dir / f"duel_log_{datetime.now().strftime('%Y-%m-%d')}.log"

        # File handler for detailed logs
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(self.level)

        # Console handler for only important messages (WARNING and above)
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)

        file_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_formatter = logging.Formatter(
            '%(levelname)s: %(message)s'
        )

        file_handler.setFormatter(file_formatter)
        console_handler.setFormatter(console_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    def _create_log_entry(self,
                          event_type: str,
                          action: str,
                          user_info: Dict[str, Any],
                          details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user_info,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_connection(self, request, action: str, **kwargs):
        """Log connect/disconnect of a socket."""
        log_message = self._create_log_entry(
            'CONNECTION_EVENT', action, get_connection_identity(request), kwargs
        )
        self.logger.info(log_message)

    def log_user_action(self,
                        request,
                        action: str,
                        room: Optional[str] = None,
                        payload: Any = None,
                        **kwargs):
        """
        Log an inbound socket message.

        Args:
            request: Flask request object (carries the Socket.IO sid)
            action: Message name (e.g. 'join', 'set-word', 'guess')
            room: Room code if applicable
            payload: Raw payload as received; secret words are masked
            **kwargs: Additional details to log
        """
        details = {
            'room': room,
            'payload': self._sanitize_payload(payload),
            **kwargs
        }

        log_message = self._create_log_entry('USER_ACTION', action, get_connection_identity(request), details)
        self.logger.info(log_message)

    def log_server_response(self,
                            request,
                            action: str,
                            success: bool,
                            response_data: Dict[str, Any],
                            room: Optional[str] = None,
                            **kwargs):
        """
        Log what the server replied to a socket message.

        Args:
            request: Flask request object
            action: Message that was handled
            success: Whether the action succeeded
            response_data: Summary of what was sent back
            room: Room code if applicable
        """
        details = {
            'room': room,
            'success': success,
            'response_data': self._sanitize_payload(response_data),
            **kwargs
        }

        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        log_message = self._create_log_entry(event_type, action, get_connection_identity(request), details)

        if success:
            self.logger.info(log_message)
        else:
            self.logger.warning(log_message)

    def log_game_event(self,
                       room: Optional[str],
                       event: str,
                       sid: Optional[str],
                       **kwargs):
        """
        Log game-specific events (word locked, guess, round over, etc.).

        Args:
            room: Room code
            event: Type of game event (e.g., 'word_locked', 'round_won', 'room_closed')
            sid: Connection that caused the event, or 'system'
            **kwargs: Additional game details
        """
        user_info = {'user_ip': None, 'session_id': sid}

        details = {
            'room': room,
            **kwargs
        }

        log_message = self._create_log_entry('GAME_EVENT', event, user_info, details)
        self.logger.info(log_message)

    def log_error(self,
                  request,
                  error: Exception,
                  action: str,
                  room: Optional[str] = None):
        """
        Log errors with full context.

        Args:
            request: Flask request object
            error: Exception that occurred
            action: Action that was being performed
            room: Room code if applicable
        """
        details = {
            'room': room,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'action': action
        }

        log_message = self._create_log_entry('ERROR', action, get_connection_identity(request), details)
        self.logger.error(log_message, exc_info=error)

    def _sanitize_payload(self, data: Any) -> Any:
        """Mask secret words so a log reader cannot spoil a round."""
        if not isinstance(data, dict):
            return data if data is None or isinstance(data, (str, int, float, bool)) else {
                'data_type': type(data).__name__
            }

        sanitized = data.copy()
        for key in _SECRET_KEYS:
            if key in sanitized:
                sanitized[key] = '*****'
        return sanitized


def _create_game_logger() -> GameLogger:
    from ..config.app_config import Config
    return GameLogger(log_dir=Config.LOG_DIR, level=Config.LOG_LEVEL)


# Global logger instance
game_logger = _create_game_logger()
