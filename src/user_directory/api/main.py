"""
ASGI entry point for the user directory.

Loads configuration from CONFIG_FILE / ENV_FILE and the environment, sets
up logging and exposes `app` for uvicorn.
"""

import os

from user_directory.api.app import create_app
from user_directory.lib.config import get_config_manager, setup_logging


config = get_config_manager(os.getenv("CONFIG_FILE"), os.getenv("ENV_FILE")).load_config()
setup_logging(config)

app = create_app(config)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.api.host, port=config.api.port)
