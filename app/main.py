"""ASGI entry point.

Serve with any ASGI server, pointing it at ``main:server_app``.
"""

from dotenv import load_dotenv

load_dotenv()

from server import server  # noqa: E402

server_app = server.handler
