"""A web chat server: login, registration, static pages and a broadcast websocket."""

import asyncio
import contextlib
import logging
import sys
from pathlib import Path

from aiohttp import WSMsgType, web

from linuxlab.imsession import SESSION_ID, SESSION_NAME, SessionTable
from linuxlab.imstore import UserStore
from linuxlab.imutil import CredentialsError, parse_credentials

DEFAULT_PORT = 8080
DOCUMENT_ROOT = "web"
SESSION_CHECK_INTERVAL = 5.0
JOIN_MESSAGE = "some body join..."
LOGIN_PAGE = "/login.html"

# Result codes returned by the login and register endpoints.
RESULT_OK = 0
RESULT_REJECTED = 1
RESULT_BAD_REQUEST = 2
RESULT_NO_SESSION = 3

log = logging.getLogger(__name__)


def _result(code: int) -> web.Response:
    return web.Response(
        text=f'{{"result": {code}}}', content_type="application/json"
    )


class ImServer:
    """Serves the chat pages and relays every websocket message to everyone."""

    def __init__(
        self,
        port: int = DEFAULT_PORT,
        document_root: str | Path = DOCUMENT_ROOT,
        store: UserStore | None = None,
        sessions: SessionTable | None = None,
    ):
        self.port = port
        self.document_root = Path(document_root)
        self.store = store if store is not None else UserStore()
        self.sessions = sessions if sessions is not None else SessionTable()
        self._websockets: set[web.WebSocketResponse] = set()

    def make_app(self) -> web.Application:
        """Build the web application."""
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", self._dispatch)
        app.cleanup_ctx.append(self._session_checker)
        app.on_shutdown.append(self._close_websockets)
        return app

    async def broadcast(self, message: str) -> int:
        """Send message to every open websocket; return how many got it."""
        sent = 0
        for ws in list(self._websockets):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except (ConnectionError, RuntimeError):
                continue
            sent += 1
        return sent

    def start(self) -> None:
        """Run the server until interrupted."""
        web.run_app(self.make_app(), port=self.port)

    async def _dispatch(self, request: web.Request) -> web.StreamResponse:
        if request.headers.get("Upgrade", "").lower() == "websocket":
            return await self._chat(request)
        path = request.path
        if path == "/LH" and request.method == "POST":
            return await self._login(request)
        if path == "/RH" and request.method == "POST":
            return await self._register(request)
        if path in ("", "/", "/index.html"):
            if not self.sessions.is_login(request.headers.get("Cookie")):
                return web.Response(status=302, headers={"Location": LOGIN_PAGE})
        return self._serve_file(path)

    def _serve_file(self, path: str) -> web.StreamResponse:
        root = self.document_root.resolve()
        target = (root / path.lstrip("/")).resolve()
        if target != root and root not in target.parents:
            raise web.HTTPNotFound()
        if target.is_dir():
            target = target / "index.html"
        if not target.is_file():
            raise web.HTTPNotFound()
        return web.FileResponse(target)

    async def _credentials(self, request: web.Request) -> tuple[str, str] | None:
        body = await request.read()
        try:
            name, passwd = parse_credentials(body)
        except CredentialsError as exc:
            log.warning("%s", exc)
            return None
        if not name or not passwd:
            return None
        return name, passwd

    async def _register(self, request: web.Request) -> web.Response:
        credentials = await self._credentials(request)
        if credentials is None:
            return _result(RESULT_BAD_REQUEST)
        loop = asyncio.get_running_loop()
        ok = await loop.run_in_executor(None, self.store.insert_user, *credentials)
        return _result(RESULT_OK if ok else RESULT_REJECTED)

    async def _login(self, request: web.Request) -> web.Response:
        credentials = await self._credentials(request)
        if credentials is None:
            return _result(RESULT_BAD_REQUEST)
        name, _ = credentials
        loop = asyncio.get_running_loop()
        ok = await loop.run_in_executor(None, self.store.select_user, *credentials)
        if not ok:
            return _result(RESULT_REJECTED)
        try:
            session = self.sessions.create_session(name)
        except RuntimeError:
            return _result(RESULT_NO_SESSION)
        response = _result(RESULT_OK)
        response.headers.add("Set-Cookie", f"{SESSION_ID}={session.id}; path=/")
        response.headers.add("Set-Cookie", f"{SESSION_NAME}={name}; path=/")
        return response

    async def _chat(self, request: web.Request) -> web.WebSocketResponse:
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        self._websockets.add(ws)
        try:
            await self.broadcast(JOIN_MESSAGE)
            async for msg in ws:
                if msg.type == WSMsgType.TEXT:
                    await self.broadcast(msg.data)
                elif msg.type == WSMsgType.BINARY:
                    await self.broadcast(msg.data.decode("utf-8", errors="replace"))
        finally:
            self._websockets.discard(ws)
        return ws

    async def _check_sessions_forever(self) -> None:
        while True:
            await asyncio.sleep(SESSION_CHECK_INTERVAL)
            self.sessions.check_sessions()

    async def _session_checker(self, app: web.Application):
        task = asyncio.create_task(self._check_sessions_forever())
        yield
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _close_websockets(self, app: web.Application) -> None:
        for ws in list(self._websockets):
            await ws.close()


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) > 1:
        print("usage: imserver [port]", file=sys.stderr)
        return 1
    try:
        port = int(args[0]) if args else DEFAULT_PORT
    except ValueError:
        print("usage: imserver [port]", file=sys.stderr)
        return 1
    ImServer(port).start()
    return 0