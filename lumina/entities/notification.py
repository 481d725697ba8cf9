# lumina/entities/notification.py
from enum import Enum


class NotificationKind(str, Enum):
    MESSAGE = "MESSAGE"
    SALE = "SALE"
    SYSTEM = "SYSTEM"
