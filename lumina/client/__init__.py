from lumina.client.chat_client import ChatClient
from lumina.client.chat_state import ChatMessage, ChatPhase, ChatState, DeliveryStatus
from lumina.client.http_api import ApiError, AuthenticationRequired, ChatApi
from lumina.client.realtime import SocketIOConnection

__all__ = [
    "ApiError",
    "AuthenticationRequired",
    "ChatApi",
    "ChatClient",
    "ChatMessage",
    "ChatPhase",
    "ChatState",
    "DeliveryStatus",
    "SocketIOConnection",
]
