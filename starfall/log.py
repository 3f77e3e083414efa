"""
Logging Setup
==============
The game owns the whole terminal, so records go to a file only.
"""

import logging
from typing import Optional, Union


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = 'starfall.log'


def setup_logging(level: Union[int, str] = logging.INFO,
                  path: Optional[str] = DEFAULT_LOG_FILE) -> logging.Logger:
    """
    Configure the root logger with a file handler.

    Does nothing when the root logger already has handlers (for example
    under a test runner). Pass path=None to silence logging entirely.
    """
    root = logging.getLogger()
    if not root.handlers:
        if path is None:
            handlers = [logging.NullHandler()]
        else:
            handlers = [logging.FileHandler(path)]
        logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
    return logging.getLogger('starfall')
