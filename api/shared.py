"""
Shared configuration và dependency providers cho tất cả API routes
"""

from dataclasses import dataclass
from typing import Optional
import logging
import os
import pytz
from services.report_service import ReportService
from services.telegram_service import (
    TelegramNotifier,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_SEND_DELAY,
    DEFAULT_TIMEOUT,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# Cache variables
_settings_cache = None
_notifier_cache = None


@dataclass(frozen=True)
class Settings:
    """Cấu hình đọc một lần từ biến môi trường"""
    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None
    telegram_chunk_size: int = DEFAULT_CHUNK_SIZE
    telegram_send_delay: float = DEFAULT_SEND_DELAY
    telegram_timeout: float = DEFAULT_TIMEOUT
    report_timezone: str = "UTC"
    log_level: str = "INFO"

    def __post_init__(self):
        try:
            pytz.timezone(self.report_timezone)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown REPORT_TIMEZONE: {self.report_timezone!r}")

    @property
    def telegram_configured(self) -> bool:
        return bool(self.telegram_bot_token) and bool(self.telegram_chat_id)

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Tạo Settings từ environ (mặc định os.environ)"""
        env = os.environ if environ is None else environ
        return cls(
            telegram_bot_token=env.get("TELEGRAM_BOT_TOKEN") or None,
            telegram_chat_id=env.get("TELEGRAM_CHAT_ID") or None,
            telegram_chunk_size=int(env.get("TELEGRAM_CHUNK_SIZE", DEFAULT_CHUNK_SIZE)),
            telegram_send_delay=float(env.get("TELEGRAM_SEND_DELAY", DEFAULT_SEND_DELAY)),
            telegram_timeout=float(env.get("TELEGRAM_TIMEOUT", DEFAULT_TIMEOUT)),
            report_timezone=env.get("REPORT_TIMEZONE", "UTC"),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)


def get_settings() -> Settings:
    """Load Settings (có cache)"""
    global _settings_cache

    if _settings_cache is not None:
        return _settings_cache

    _settings_cache = Settings.from_env()
    return _settings_cache


def get_notifier() -> TelegramNotifier:
    """Dependency để tạo TelegramNotifier (có cache)"""
    global _notifier_cache

    if _notifier_cache is not None:
        return _notifier_cache

    settings = get_settings()
    _notifier_cache = TelegramNotifier(
        bot_token=settings.telegram_bot_token,
        chat_id=settings.telegram_chat_id,
        chunk_size=settings.telegram_chunk_size,
        send_delay=settings.telegram_send_delay,
        timeout=settings.telegram_timeout,
    )
    return _notifier_cache


def get_report_service() -> ReportService:
    """Dependency để tạo ReportService"""
    return ReportService(timezone_name=get_settings().report_timezone)


def clear_cache():
    """Clear tất cả cache - dùng cho testing hoặc reload cấu hình"""
    global _settings_cache, _notifier_cache

    _settings_cache = None
    _notifier_cache = None
