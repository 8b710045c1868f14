"""
Log filters.
"""

import logging
from typing import Any, Dict


class ExtraFieldsFilter(logging.Filter):
    """
    Adds static fields to every record (service name, environment, ...).

    Fields already present on the record are left alone.
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = extra_fields

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
