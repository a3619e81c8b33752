import logging
import os
from datetime import datetime
from barcode_scanner.config.settings import PathConfig

def setup_logging(level=logging.INFO):
    """Configure logging for the application."""
    os.makedirs(PathConfig.LOG_DIR, exist_ok=True)

    log_file = os.path.join(
        PathConfig.LOG_DIR,
        f'barcode_scanner_{datetime.now().strftime("%Y%m%d")}.log'
    )

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )

    return logging.getLogger("barcode_scanner")
