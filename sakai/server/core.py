"""Application core plugin."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from litestar.plugins import CLIPluginProtocol, InitPluginProtocol

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from click import Group
    from litestar import Litestar
    from litestar.config.app import AppConfig


logger = structlog.get_logger()


class ApplicationCore(InitPluginProtocol, CLIPluginProtocol):
    """Application core configuration plugin.

    This class is responsible for configuring the main Litestar application
    with routes, dependencies, and various plugins.
    """

    __slots__ = ("app_name",)
    app_name: str

    def __init__(self) -> None:
        """Initialize the plugin."""

    def on_cli_init(self, cli: Group) -> None:
        """Configure CLI commands."""
        from sakai.cli.commands import assistant_group
        from sakai.lib.settings import get_settings

        settings = get_settings()
        self.app_name = settings.app.NAME
        cli.add_command(assistant_group)

    @asynccontextmanager
    async def server_lifespan(self, app: Litestar) -> AsyncGenerator[None, None]:
        """Create the GenAI client on startup.

        Args:
            app: The Litestar application instance.

        Yields:
            None during application runtime.
        """
        from sakai.services.genai import get_genai_service

        genai_service = get_genai_service()
        logger.info("Starting Sakai assistant", debug=app.debug, genai=genai_service.is_initialized)
        try:
            yield
        finally:
            logger.info("Shutting down Sakai assistant")

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Configure application routes, plugins and signature namespace.

        Args:
            app_config: The AppConfig instance.

        Returns:
            The configured app config.
        """
        from litestar.openapi import OpenAPIConfig
        from litestar.openapi.plugins import ScalarRenderPlugin

        from sakai import config
        from sakai import schemas as s
        from sakai.lib.log import after_exception_hook_handler
        from sakai.lib.settings import get_settings
        from sakai.server import plugins
        from sakai.server.controllers import AssistantController
        from sakai.services.assistant import ChatAssistantService
        from sakai.services.flows import AssistantFlowService
        from sakai.services.genai import GenAIService

        settings = get_settings()
        self.app_name = settings.app.NAME
        app_config.debug = settings.app.DEBUG

        app_config.lifespan = [self.server_lifespan]
        app_config.after_exception.append(after_exception_hook_handler)

        app_config.openapi_config = OpenAPIConfig(
            title=settings.app.NAME,
            version=settings.app.VERSION,
            use_handler_docstrings=True,
            render_plugins=[ScalarRenderPlugin(version="latest")],
        )
        app_config.cors_config = config.cors
        app_config.compression_config = config.compression
        app_config.plugins.extend(
            [
                plugins.structlog,
                plugins.granian,
                plugins.problem_details,
            ],
        )

        app_config.route_handlers.append(AssistantController)

        # Signature namespace for dependency injection
        app_config.signature_namespace.update({
            "s": s,
            "AssistantFlowService": AssistantFlowService,
            "ChatAssistantService": ChatAssistantService,
            "GenAIService": GenAIService,
        })
        return app_config
