"""Shared logging configuration."""
import os
import sys
import json
import traceback
from aws_lambda_powertools import Logger

def format_exception(exc_info):
    """
    Collapse exception info into a single ' | '-separated line.

    Accepts True (use the exception being handled) or an exc_info tuple.
    Returns None when there is nothing to format.
    """
    if exc_info is True:
        exc_info = sys.exc_info()
    if not (isinstance(exc_info, tuple) and len(exc_info) == 3) or exc_info[0] is None:
        return None

    lines = traceback.format_exception(*exc_info)
    return ' | '.join(
        part.strip() for line in lines for part in line.splitlines() if part.strip()
    )

class SingleLineLogger(Logger):
    """Logger that renders exception tracebacks on a single line."""

    def exception(self, message, *args, **kwargs):
        extra = kwargs.pop('extra', {})
        extra['exception'] = format_exception(kwargs.pop('exc_info', True))
        super().error(message, *args, extra=extra, **kwargs)

logger = SingleLineLogger(
    service=os.environ.get('POWERTOOLS_SERVICE_NAME', 'cycle_engine'),
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    json_serializer=json.dumps,
    use_rfc3339=True
)

logger.append_keys(stage=os.environ.get('STAGE', 'dev'))
