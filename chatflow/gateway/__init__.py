"""Render gateway module."""

from .gateway import IRenderGateway, LoggingGateway

__all__ = ["IRenderGateway", "LoggingGateway"]
