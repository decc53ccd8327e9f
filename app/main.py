"""ASGI entry point exposing the FastAPI application as ``server_app``."""

from server import server

server_app = server.handler
