"""
Notification sinks for per-file failures reported to the surrounding application
"""
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from nfobridge.utils.logging import _log


class MessageLevel(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Message:
    """A single reportable event, usually a failed NFO write"""
    level: MessageLevel
    subject: str
    text: str
    path: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level.value,
            "subject": self.subject,
            "text": self.text,
            "path": self.path,
            "timestamp": self.timestamp.isoformat(),
        }


class MessageSink:
    """Base sink; subclasses decide where messages end up"""

    def push(self, message: Message) -> None:
        raise NotImplementedError

    def error(self, subject: str, text: str, path: Optional[str] = None) -> None:
        self.push(Message(MessageLevel.ERROR, subject, text, path))

    def warning(self, subject: str, text: str, path: Optional[str] = None) -> None:
        self.push(Message(MessageLevel.WARNING, subject, text, path))


class LoggingMessageSink(MessageSink):
    """Forwards messages to the application log"""

    def push(self, message: Message) -> None:
        location = f" ({message.path})" if message.path else ""
        _log(message.level.name, f"{message.subject}: {message.text}{location}")


class MessageCollector(MessageSink):
    """Keeps messages in memory; safe to share between worker threads"""

    def __init__(self, forward: Optional[MessageSink] = None):
        self._messages: List[Message] = []
        self._lock = threading.Lock()
        self._forward = forward

    def push(self, message: Message) -> None:
        with self._lock:
            self._messages.append(message)
        if self._forward is not None:
            self._forward.push(message)

    @property
    def messages(self) -> List[Message]:
        with self._lock:
            return list(self._messages)

    def drain(self) -> List[Message]:
        """Return and forget everything collected so far"""
        with self._lock:
            messages, self._messages = self._messages, []
        return messages

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)
