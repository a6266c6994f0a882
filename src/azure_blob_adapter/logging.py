import logging
import sys

from pythonjsonlogger import jsonlogger


def setup_logging(level: int = logging.INFO):
    """
    Configures structured JSON logging for the application.

    Installs a JSON formatter that includes timestamp, level, logger name
    and message on a stdout stream handler, replacing any handlers already
    attached to the root logger. The Azure SDK's HTTP logging policy is
    capped at WARNING so request/response dumps do not flood the output.

    Args:
        level: Log level for the root logger.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    for logger_name in ["azure.core.pipeline.policies.http_logging_policy"]:
        sdk_logger = logging.getLogger(logger_name)
        sdk_logger.setLevel(max(level, logging.WARNING))

    return root_logger
