"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn recipe_importer.main:app --reload
"""

from recipe_importer.factory import create_app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from recipe_importer.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "recipe_importer.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )
