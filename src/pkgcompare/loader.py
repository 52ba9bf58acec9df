"""Reading package records from JSON files."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from pkgcompare.models.schemas import PackageRecord

logger = logging.getLogger(__name__)


class RecordLoadError(ValueError):
    """Raised when a records file cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load records from {path}: {reason}")


def load_records(path: Path) -> list[PackageRecord]:
    """Load a JSON list of package records.

    Args:
        path: File holding a JSON array of record objects.

    Returns:
        Parsed records, in file order.

    Raises:
        RecordLoadError: If the file is missing, not JSON, or not a list of records.
    """
    try:
        data = json.loads(path.read_text())
    except OSError as e:
        raise RecordLoadError(path, e.strerror or str(e)) from e
    except json.JSONDecodeError as e:
        raise RecordLoadError(path, f"invalid JSON ({e.msg} at line {e.lineno})") from e

    if not isinstance(data, list):
        raise RecordLoadError(path, "expected a JSON array of records")

    records = []
    for index, item in enumerate(data):
        try:
            records.append(PackageRecord.model_validate(item))
        except ValidationError as e:
            raise RecordLoadError(path, f"record {index} is invalid: {e.error_count()} error(s)") from e

    logger.debug(f"Loaded {len(records)} records from {path}")
    return records
