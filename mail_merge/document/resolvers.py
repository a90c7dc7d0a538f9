"""
Value resolvers: look up the replacement text for a merge field name.
"""

import csv
import json
import os
from typing import Any, Callable, Dict, List, Mapping, Protocol

from ..core.config import Config
from ..core.errors import FieldNotFound


class ValueResolver(Protocol):
    """Anything with a ``resolve(field_name) -> str`` method."""

    def resolve(self, field_name: str) -> str:
        ...


class DictResolver:
    """Resolves field names from one record (a mapping of name to value)."""

    def __init__(self, record: Mapping[str, Any]):
        self.record = record

    def resolve(self, field_name: str) -> str:
        if field_name not in self.record:
            raise FieldNotFound(field_name)
        value = self.record[field_name]
        return '' if value is None else str(value)

    def __repr__(self) -> str:
        return f"DictResolver({sorted(self.record)})"


class CallableResolver:
    """Adapts a plain function; a LookupError from it means the field is unknown."""

    def __init__(self, func: Callable[[str], Any]):
        self.func = func

    def resolve(self, field_name: str) -> str:
        try:
            value = self.func(field_name)
        except LookupError as e:
            raise FieldNotFound(field_name) from e
        return '' if value is None else str(value)


class ChainResolver:
    """Asks each resolver in turn; the first that knows the field wins."""

    def __init__(self, *resolvers: ValueResolver):
        self.resolvers = resolvers

    def resolve(self, field_name: str) -> str:
        for resolver in self.resolvers:
            try:
                return resolver.resolve(field_name)
            except FieldNotFound:
                continue
        raise FieldNotFound(field_name)


def load_records(records_path: str) -> List[Dict[str, Any]]:
    """
    Load merge records from a CSV or JSON file.

    CSV files use their header row as field names. JSON files must hold a
    list of objects.

    Args:
        records_path: Path to a .csv or .json file

    Returns:
        List of records in file order
    """
    ext = os.path.splitext(records_path)[1].lower()

    if ext == '.csv':
        with open(records_path, newline='', encoding=Config.RECORDS_ENCODING) as f:
            return [dict(row) for row in csv.DictReader(f)]

    if ext == '.json':
        with open(records_path, encoding=Config.RECORDS_ENCODING) as f:
            data = json.load(f)
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise ValueError(f"JSON records must be a list of objects: {records_path}")
        return data

    raise ValueError(f"Unsupported records format '{ext}': {records_path}")
