"""
Entry point for running the relay directly with `python run_server.py`.
"""

if __name__ == "__main__":
    import uvicorn

    from connected_screens.logging import logger
    from connected_screens.settings import app_settings

    logger.info(
        f"Starting WebSocket server on "
        f"ws://{app_settings.HOST}:{app_settings.PORT}{app_settings.WS_PATH}"
    )
    uvicorn.run(
        "connected_screens:application",
        factory=True,
        host=app_settings.HOST,
        port=app_settings.PORT,
        log_config=None,
    )
