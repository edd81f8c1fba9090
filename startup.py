import logging
import os
import sys
import traceback

import uvicorn

# Configure logging to stdout until the app installs its own handler
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

# Add the src directory to Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
src_path = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)


def log_environment() -> None:
    """Log the deployment-relevant environment without exposing secrets."""
    logger.info("=" * 60)
    logger.info("DocIntro Backend Startup")
    logger.info("=" * 60)
    logger.info(f"Python version: {sys.version.split()[0]}")
    logger.info(f"Source path: {src_path}")
    logger.info(f"  PORT: {os.environ.get('PORT', 'not set')}")
    logger.info(f"  APP_ENV: {os.environ.get('APP_ENV', 'not set')}")
    logger.info(f"  MONGO_URI: {'set' if os.environ.get('MONGO_URI') else 'not set'}")
    logger.info(f"  MONGO_DB_NAME: {os.environ.get('MONGO_DB_NAME', 'not set')}")
    logger.info(f"  VIDEO_STORAGE_MODE: {os.environ.get('VIDEO_STORAGE_MODE', 'local')}")
    logger.info(f"  SENDGRID_API_KEY: {'set' if os.environ.get('SENDGRID_API_KEY') else 'not set'}")
    logger.info(f"  FRONT_END_URL: {os.environ.get('FRONT_END_URL', 'not set')}")
    logger.info(f"  BACK_END_URL: {os.environ.get('BACK_END_URL', 'not set')}")


if __name__ == "__main__":
    log_environment()
    try:
        from docintro.core.config import get_settings

        try:
            settings = get_settings()
        except ValueError as ve:
            logger.error(f"Configuration validation failed: {ve}")
            logger.error("Common configuration issues:")
            logger.error("  1. MONGO_URI must be set and start with mongodb:// or mongodb+srv://")
            logger.error("  2. VIDEO_STORAGE_MODE must be 'local' or 'azure'")
            logger.error("  3. AZURE_BLOB_CONNECTION_STRING must start with DefaultEndpointsProtocol=")
            sys.exit(1)

        port = int(os.environ.get("PORT", settings.port))
        host = os.environ.get("HOST", settings.host)
        logger.info(f"Starting {settings.app_name} v{settings.app_version} on {host}:{port}")

        uvicorn.run(
            "docintro.app:create_app",
            factory=True,
            host=host,
            port=port,
            workers=1,
            log_level="info",
            access_log=True,
            timeout_keep_alive=75,
            timeout_graceful_shutdown=30,
        )
    except KeyboardInterrupt:
        logger.info("Shutting down due to keyboard interrupt")
        sys.exit(0)
    except Exception as e:
        logger.error(f"CRITICAL: Failed to start application: {type(e).__name__}: {e}")
        logger.error(traceback.format_exc())
        sys.exit(1)
