"""
Logging configuration for exactorbit.

Library modules only create module loggers with ``logging.getLogger(__name__)``;
nothing is configured until an application calls :func:`setup_logging`:

    ```python
    from exactorbit.logging_config import setup_logging
    setup_logging()
    ```

The engine logs one debug line per registered body and per ``update``, which
is noisy on the console, so the simulation logger sends debug output to the
log file only. Sampling runs report at info level on the console.
"""

import logging
import logging.config
from pathlib import Path


def setup_logging(default_level=logging.INFO, log_dir="logs", console_level="INFO", log_to_file=True):
    """
    Configure console and rotating-file logging for the package.

    Parameters
    ----------
    default_level : int, optional
        Level of the root logger. Default is logging.INFO.
    log_dir : str or Path, optional
        Directory for ``simulation.log`` and ``error.log``. Created if
        missing. Default is "logs".
    console_level : str, optional
        Minimum level printed to stdout. Default is "INFO".
    log_to_file : bool, optional
        Write the log files. Default is True.

    Returns
    -------
    None
        The function configures the logging system directly.
    """
    handlers = {
        'console': {
            'class': 'logging.StreamHandler',
            'level': console_level,
            'formatter': 'standard',
            'stream': 'ext://sys.stdout',
        },
    }
    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        handlers['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': 'DEBUG',
            'formatter': 'detailed',
            'filename': str(log_path / 'simulation.log'),
            'maxBytes': 10485760,  # 10 MB
            'backupCount': 5,
            'encoding': 'utf8'
        }
        handlers['error_file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': 'ERROR',
            'formatter': 'detailed',
            'filename': str(log_path / 'error.log'),
            'maxBytes': 10485760,  # 10 MB
            'backupCount': 5,
            'encoding': 'utf8'
        }

    file_handlers = [name for name in ('file',) if name in handlers]

    config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
            'detailed': {
                'format': '%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
        },
        'handlers': handlers,
        'loggers': {
            '': {  # root logger
                'handlers': list(handlers),
                'level': default_level,
                'propagate': True
            },
            'exactorbit.algorithms.dynamics.simulation': {
                # debug records reach only the file handler through the root logger
                'handlers': [],
                'level': 'DEBUG',
                'propagate': True
            },
            'exactorbit.algorithms.dynamics.sampling': {
                'handlers': ['console'] + file_handlers,
                'level': 'INFO',
                'propagate': False
            },
        }
    }

    logging.config.dictConfig(config)

    logger = logging.getLogger(__name__)
    logger.debug("Logging configuration applied")
