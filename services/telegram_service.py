"""
Telegram Service
Gửi báo cáo lên Telegram Bot API, tự chia nhỏ khi vượt giới hạn độ dài tin nhắn
"""

import json
import logging
import time
from typing import Callable, List, Optional
import requests

logger = logging.getLogger(__name__)

API_BASE = "https://api.telegram.org"

# Telegram giới hạn 4096 ký tự mỗi tin, chừa chỗ cho marker "(continued)"
DEFAULT_CHUNK_SIZE = 4000
DEFAULT_SEND_DELAY = 1.0
DEFAULT_TIMEOUT = 10.0

CONTINUED_SUFFIX = "\n\n... (continued)"
CONTINUED_PREFIX = "... (continued)\n\n"


class TelegramDeliveryError(Exception):
    """Lỗi khi gửi tin nhắn (lỗi mạng hoặc API trả về ok=false)"""


def utf16_length(text: str) -> int:
    """Độ dài theo đơn vị UTF-16, cách Telegram đếm độ dài tin nhắn"""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def _slice_utf16(text: str, chunk_size: int) -> List[str]:
    """Cắt text thành các đoạn tối đa chunk_size đơn vị UTF-16, không tách cặp surrogate"""
    pieces = []
    start = 0
    units = 0
    for index, char in enumerate(text):
        width = 2 if ord(char) > 0xFFFF else 1
        if units + width > chunk_size:
            pieces.append(text[start:index])
            start = index
            units = 0
        units += width
    pieces.append(text[start:])
    return pieces


def split_message(text: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> List[str]:
    """
    Chia báo cáo thành các phần tối đa chunk_size đơn vị UTF-16

    Độ dài được đo theo UTF-16 như Telegram: emoji ngoài BMP chiếm 2 đơn vị.
    Phần nào còn phần sau thì thêm hậu tố "(continued)", phần nào nối tiếp
    phần trước thì thêm tiền tố "(continued)".

    Args:
        text: Nội dung báo cáo
        chunk_size: Số đơn vị UTF-16 tối đa mỗi phần (không tính marker), tối thiểu 2

    Returns:
        Danh sách các phần theo thứ tự gửi
    """
    if chunk_size < 2:
        raise ValueError("chunk_size must be at least 2")
    if utf16_length(text) <= chunk_size:
        return [text]

    pieces = _slice_utf16(text, chunk_size)
    last = len(pieces) - 1
    parts = []
    for index, piece in enumerate(pieces):
        if index > 0:
            piece = CONTINUED_PREFIX + piece
        if index < last:
            piece = piece + CONTINUED_SUFFIX
        parts.append(piece)
    return parts


class TelegramNotifier:
    """
    Client gửi tin nhắn tới một chat Telegram

    Không retry: lần gửi lỗi đầu tiên sẽ dừng việc gửi các phần còn lại.
    """

    def __init__(self,
                 bot_token: Optional[str],
                 chat_id: Optional[str],
                 chunk_size: int = DEFAULT_CHUNK_SIZE,
                 send_delay: float = DEFAULT_SEND_DELAY,
                 timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.chunk_size = chunk_size
        self.send_delay = send_delay
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self._sleep = sleep

    @property
    def is_configured(self) -> bool:
        return bool(self.bot_token) and bool(self.chat_id)

    @property
    def url(self) -> str:
        return f"{API_BASE}/bot{self.bot_token}/sendMessage"

    def send_report(self, text: str) -> int:
        """
        Gửi báo cáo, chia thành nhiều tin nếu cần

        Returns:
            Số tin nhắn đã gửi

        Raises:
            TelegramDeliveryError: Khi một lần gửi thất bại
        """
        parts = split_message(text, self.chunk_size)
        if len(parts) > 1:
            logger.info("Report is %d UTF-16 units, sending in %d parts", utf16_length(text), len(parts))

        for index, part in enumerate(parts):
            if index > 0:
                self._sleep(self.send_delay)
            self.send_message(part)
        return len(parts)

    def send_message(self, text: str) -> dict:
        """Gửi một tin nhắn qua sendMessage"""
        payload = {
            "chat_id": self.chat_id,
            "text": text,
            "parse_mode": "Markdown",
            "disable_web_page_preview": True,
        }
        logger.debug("Sending Telegram message to chat %s", self.chat_id)

        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
            result = response.json()
        except requests.exceptions.RequestException as e:
            raise TelegramDeliveryError(str(e)) from e
        except ValueError as e:
            raise TelegramDeliveryError(f"Telegram API returned invalid JSON: {e}") from e

        if not isinstance(result, dict) or not result.get("ok"):
            description = result.get("description") if isinstance(result, dict) else None
            raise TelegramDeliveryError(description or f"Telegram API error: {json.dumps(result)}")
        return result
