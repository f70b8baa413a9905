from fastapi import APIRouter, WebSocket, WebSocketDisconnect
import json
import logging

from modules.shared.response import serialize_data
from .manager import Shell

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def ws_session(websocket: WebSocket):
    """
    One browser session. Client messages are JSON actions; every state
    change is answered with {"event": "render", "data": <shell>}.
    """
    await websocket.accept()
    logger.info(f"Session opened: {websocket.client}")

    async def push_render():
        try:
            await websocket.send_json({"event": "render", "data": serialize_data(shell.render())})
        except (RuntimeError, WebSocketDisconnect) as e:
            # Background refreshes can finish after the client has gone
            logger.debug(f"Render not delivered to {websocket.client}: {e}")

    async def push_error(message):
        await websocket.send_json({"event": "error", "message": message})

    shell = Shell(websocket.app.state.store, on_render=push_render)
    try:
        await shell.start()
        await push_render()
        while True:
            data = await websocket.receive_text()
            try:
                msg = json.loads(data)
            except ValueError:
                logger.warning(f"Malformed message from session client: {data}")
                await push_error("Malformed message")
                continue
            if not isinstance(msg, dict):
                await push_error("Malformed message")
                continue

            try:
                await shell.dispatch(msg)
            except KeyError as e:
                await push_error(f"No reports at location: {e.args[0]}")
                continue
            except ValueError as e:
                logger.info(f"Rejected session action {msg.get('action')}: {e}")
                await push_error(str(e))
                continue
            await push_render()
    except WebSocketDisconnect:
        logger.info(f"Session closed: {websocket.client}")
    finally:
        await shell.stop()
