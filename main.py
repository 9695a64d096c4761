"""
Local entrypoint: run the imbibe action API under uvicorn.

Env: SOLANA_RPC_URL, API_HOST, API_PORT, LOG_LEVEL, LOG_FORMAT.

Serverless deployments import `app` from api/index.py instead.
"""

from imbibe_action.logging import configure_structlog, get_logger

logger = get_logger("main")


def main() -> None:
    """Load settings and serve the FastAPI app in the main thread."""
    import uvicorn

    from imbibe_action.api_server.app import app
    from imbibe_action.config import get_settings
    from imbibe_action.config.env import mask_rpc_url

    settings = get_settings()
    configure_structlog(settings.log_level, settings.log_format)
    logger.info(
        "main_server_starting",
        host=settings.api_host,
        port=settings.api_port,
        rpc_url=mask_rpc_url(settings.solana_rpc_url),
    )
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level)


if __name__ == "__main__":
    main()
