import logging
import os
import sys

import uvicorn

from issueforge.application import create_app
from issueforge.config import load_settings
from issueforge.errors import ConfigurationError

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s | %(name)s | %(message)s",
)

logger = logging.getLogger("issueforge")

# Load settings from the environment and .env file; missing DATABASE_URL is fatal
try:
    settings = load_settings()
except ConfigurationError as exc:
    logger.critical(str(exc))
    sys.exit(1)

app = create_app(settings)


if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "5000"))
    logger.info(f"IssueForge backend listening on http://{host}:{port}/api/issues")
    uvicorn.run(app, host=host, port=port)
