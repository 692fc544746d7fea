import logging
from storefront.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=LOG_FORMAT)
    # httpx logs every request at INFO, which buries the checkout trail
    logging.getLogger("httpx").setLevel(logging.WARNING)
