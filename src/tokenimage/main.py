"""TokenImage - Main application entry point."""

import uvicorn

from tokenimage.api.app import create_app
from tokenimage.config import get_settings

# Create the app instance
app = create_app()


def main() -> None:
    """Run the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "tokenimage.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
