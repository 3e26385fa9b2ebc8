from . import create_app
from .config import Config
from .logging_setup import setup_logging


def main():
    setup_logging(Config.LOG_LEVEL, Config.LOG_DIR)
    app = create_app()
    app.run(host="0.0.0.0", port=Config.PORT)


if __name__ == "__main__":
    main()
