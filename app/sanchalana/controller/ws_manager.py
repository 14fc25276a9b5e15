import logging
from typing import Any, Callable, Dict, List, Tuple
from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.append(websocket)

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

    async def broadcast(self, message: dict):
        # iterate over a copy, dead sockets are dropped while sending
        for connection in list(self.active_connections):
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.warning("Dropping websocket after failed send: %s", e)
                self.disconnect(connection)


class ScopedConnectionManager:
    """Sockets that each carry a viewer scope; a broadcast only reaches viewers allowed to see it."""

    def __init__(self):
        self.active_connections: List[Tuple[WebSocket, Any]] = []

    async def connect(self, websocket: WebSocket, scope: Any):
        await websocket.accept()
        self.active_connections.append((websocket, scope))

    def disconnect(self, websocket: WebSocket):
        self.active_connections = [(ws, scope) for ws, scope in self.active_connections if ws is not websocket]

    async def broadcast(self, message: dict, allowed: Callable[[Any], bool]):
        for connection, scope in list(self.active_connections):
            if not allowed(scope):
                continue
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.warning("Dropping websocket after failed send: %s", e)
                self.disconnect(connection)


class UserConnectionManager:
    """Sockets grouped by identity id, for messages meant for one user only."""

    def __init__(self):
        self.active_connections: Dict[str, List[WebSocket]] = {}

    async def connect(self, user_id: str, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.setdefault(user_id, []).append(websocket)

    def disconnect(self, user_id: str, websocket: WebSocket):
        connections = self.active_connections.get(user_id, [])
        if websocket in connections:
            connections.remove(websocket)
        if not connections:
            self.active_connections.pop(user_id, None)

    async def send_to_user(self, user_id: str, message: dict):
        for connection in list(self.active_connections.get(user_id, [])):
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.warning("Dropping session socket of %s after failed send: %s", user_id, e)
                self.disconnect(user_id, connection)


# Separate managers for different types of updates
registration_manager = ScopedConnectionManager()
live_count_manager = ConnectionManager()
session_manager = UserConnectionManager()
