import uvicorn

from .core.app_factory import create_application


def main() -> None:
    app = create_application()
    settings = app.state.settings
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
