import uvicorn

from analyzer.api.app import create_app
from analyzer.api.dependencies import build_services
from analyzer.config.settings import Settings
from analyzer.database.connection import apply_schema, close_pool, init_pool
from analyzer.logging.logger import Log


def main() -> None:
    """Entry point: initialize pool -> build services -> serve the API."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        if settings.db_apply_schema:
            apply_schema()
        app = create_app(settings, build_services(settings))
        Log.info(f"Accessibility analyzer listening on {settings.host}:{settings.port}")
        uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    finally:
        close_pool()


if __name__ == "__main__":
    main()
