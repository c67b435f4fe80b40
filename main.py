"""
Entry point for the SimpleExample Users API
"""

import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from simple_example.app import app  # noqa: E402
from simple_example.config.settings import PORT  # noqa: E402

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting SimpleExample Users API on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
