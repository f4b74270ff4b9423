import asyncio
import json
import logging
import time
from typing import Awaitable, Callable, Dict, List, Optional
from urllib.parse import parse_qs, urlparse

from .request import Request
from .response import Response, error

logger = logging.getLogger()

Handler = Callable[[Request], Awaitable[object]]

STATUS_MESSAGES = {
    200: 'OK',
    201: 'Created',
    204: 'No Content',
    400: 'Bad Request',
    404: 'Not Found',
    405: 'Method Not Allowed',
    500: 'Internal Server Error',
}


class HTTPServer:
    """Minimal asyncio HTTP/1.1 server with keep-alive and decorator routing."""

    HEADER_TIMEOUT = 5.0
    BODY_TIMEOUT = 30.0
    MAX_BODY_BYTES = 10 * 1024 * 1024

    def __init__(self, host: str = '0.0.0.0', port: int = 8080):
        self.host = host
        self.port = port
        # path -> method -> handler
        self.routes: Dict[str, Dict[str, Handler]] = {}

    def route(self, path: str, methods: Optional[List] = None):
        """Decorator for registering route handlers"""
        if methods is None:
            methods = ['GET']

        def decorator(handler):
            by_method = self.routes.setdefault(path, {})
            for method in methods:
                by_method[method.upper()] = handler
            return handler
        return decorator

    def allowed_methods(self, path: str) -> List[str]:
        return sorted(self.routes.get(path, {}))

    async def parse_request(self, reader: asyncio.StreamReader) -> Optional[Request]:
        """Parse one request; None means the connection should close."""
        try:
            request_line = await asyncio.wait_for(reader.readline(), timeout=self.HEADER_TIMEOUT)
            if not request_line:
                return None

            method, full_path, version = request_line.decode('utf-8').strip().split(' ', 2)
            url = urlparse(full_path)
            headers = await self._read_headers(reader)

            body = b''
            content_length = int(headers.get('content-length', 0))
            if content_length > self.MAX_BODY_BYTES:
                raise ValueError(f"Request body too large: {content_length} bytes")
            if content_length > 0:
                body = await asyncio.wait_for(
                    reader.readexactly(content_length),
                    timeout=self.BODY_TIMEOUT
                )

            return Request(
                method=method.upper(),
                path=url.path,
                headers=headers,
                query_params=parse_qs(url.query),
                body=body,
                version=version
            )
        except asyncio.TimeoutError:
            return None
        except (asyncio.IncompleteReadError, ConnectionError):
            return None
        except (ValueError, UnicodeDecodeError) as e:
            logger.error(f"Error parsing request: {e}")
            return None

    async def _read_headers(self, reader: asyncio.StreamReader) -> Dict[str, str]:
        headers = {}
        while True:
            line = await asyncio.wait_for(reader.readline(), timeout=self.HEADER_TIMEOUT)
            if line in (b'\r\n', b'\n', b''):
                return headers

            name, sep, value = line.decode('utf-8').partition(':')
            if sep:
                headers[name.strip().lower()] = value.strip()

    def build_response(self, response: Response) -> bytes:
        """Serialize a Response to HTTP/1.1 bytes"""
        status_text = STATUS_MESSAGES.get(response.status, 'Unknown')

        response.headers.setdefault('content-type', 'text/plain')
        response.headers['content-length'] = str(len(response.body))
        response.headers['connection'] = 'keep-alive'
        response.headers['server'] = 'TreeStoreHttp/1.0'

        head = f"HTTP/1.1 {response.status} {status_text}\r\n" + ''.join(
            f"{key}: {value}\r\n" for key, value in response.headers.items()
        )
        return head.encode() + b'\r\n' + response.body

    async def handle_request(self, request: Request) -> Response:
        """Route request to appropriate handler"""
        by_method = self.routes.get(request.path)
        if by_method is None:
            return error(404, "Route Not Found")

        handler = by_method.get(request.method)
        if handler is None:
            resp = error(405, f"Method {request.method} not allowed for {request.path}")
            resp.headers['allow'] = ', '.join(self.allowed_methods(request.path))
            return resp

        try:
            return self._coerce(await handler(request))
        except Exception as e:
            logger.error(f"Handler error on {request.method} {request.path}: {e}")
            return error(500, "Internal Server Error")

    @staticmethod
    def _coerce(result: object) -> Response:
        """Turn a handler's return value into a Response."""
        if isinstance(result, Response):
            return result
        if isinstance(result, (dict, list)):
            return Response(
                headers={'content-type': 'application/json'},
                body=json.dumps(result).encode()
            )
        if isinstance(result, str):
            return Response(body=result.encode())
        if isinstance(result, bytes):
            return Response(body=result)

        raise TypeError(f"Cannot build an HTTP response from {type(result).__name__}")

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Serve requests on one connection until it closes or asks to"""
        peer = writer.get_extra_info('peername')

        try:
            while True:
                request = await self.parse_request(reader)
                if request is None:
                    break

                start_time = time.perf_counter()
                logger.debug(f"--> {request.method} {request.path}")

                response = await self.handle_request(request)
                writer.write(self.build_response(response))
                await writer.drain()

                elapsed_ms = (time.perf_counter() - start_time) * 1000
                logger.debug(
                    f"<-- {response.status} - {len(response.body)} bytes - {elapsed_ms:.2f}ms"
                )

                if request.headers.get('connection', '').lower() == 'close':
                    break
        except ConnectionResetError:
            pass
        except Exception as e:
            logger.error(f"Connection error from {peer}: {e}")
        finally:
            try:
                writer.close()
                await writer.wait_closed()
            except (ConnectionError, OSError):
                pass

    async def listen(self) -> asyncio.AbstractServer:
        """Bind the listening socket without entering the serve loop"""
        return await asyncio.start_server(self.handle_client, self.host, self.port)

    async def start(self):
        """Start the HTTP server and serve until cancelled"""
        server = await self.listen()

        addr = server.sockets[0].getsockname()
        logger.info(f'Tree store HTTP server running on http://{addr[0]}:{addr[1]}')

        try:
            async with server:
                await server.serve_forever()
        except asyncio.CancelledError:
            logger.info("Server shutdown requested")
        finally:
            await self.shutdown(server)

    async def shutdown(self, server):
        """Gracefully shutdown the server"""
        logger.info("Shutting down server...")
        server.close()
        await server.wait_closed()
        logger.info("Server shutdown complete")
