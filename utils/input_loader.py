"""
Input Loader for the Resource Usage & Deadlock Analyzer.

Loads scenario JSON files and command-line values, coercing every entry
to an integer count before it reaches the analysis engine.
"""

import json
import math

import numpy as np
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from config import DEFAULT_CONSUMER_COUNT
from models.consumer import Consumer, pad_consumers
from models.resource import DEFAULT_RESOURCE_KINDS, ResourceKind, validate_kinds
from models.system_state import ResourceSnapshot


class ScenarioLoadError(Exception):
    """Exception raised when scenario input cannot be loaded or is invalid."""
    pass


# Largest magnitude the int64 ledger and safety arrays can hold
MAX_COUNT = int(np.iinfo(np.int64).max)


def coerce_count(value: Any) -> int:
    """
    Convert a user-entered value to an integer count.

    Numbers and numeric strings are truncated toward zero. Absent, blank,
    boolean, non-numeric and non-finite values become 0.

    Args:
        value: Raw value from a form field, JSON file or command line

    Returns:
        Integer count (negative values are kept)
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return int(number)


def build_counts(raw: Optional[Mapping[str, Any]], kinds: Sequence[ResourceKind]) -> Dict[str, int]:
    """
    Build a complete kind-keyed count mapping.

    Every kind is present in the result; missing kinds are 0 and keys
    that are not a known kind are dropped.
    """
    raw = raw or {}
    return {kind.key: coerce_count(raw.get(kind.key)) for kind in kinds}


def unknown_keys(raw: Optional[Mapping[str, Any]], kinds: Sequence[ResourceKind]) -> List[str]:
    """Keys of a raw mapping that do not name any resource kind."""
    known = {kind.key for kind in kinds}
    return sorted(key for key in (raw or {}) if key not in known)


def load_scenario(
    file_path: str,
    consumer_count: int = DEFAULT_CONSUMER_COUNT,
    logger=None
) -> Tuple[ResourceSnapshot, List[Consumer]]:
    """
    Load scenario from JSON file.

    Format:
        {
          "kinds": [{"key": "printers", "label": "Printers"}, ...],   (optional)
          "resources": {"printers": 10, ...},
          "consumers": [{"name": "Kashyap", "request": {"printers": 2, ...}}, ...]
        }

    Args:
        file_path: Path to scenario JSON file
        consumer_count: Minimum number of consumers; shorter lists are
            padded with zero requests
        logger: Optional AnalysisLogger for warnings about ignored keys

    Returns:
        Tuple of (ResourceSnapshot, consumers in display order)

    Raises:
        ScenarioLoadError: If file cannot be loaded or is invalid
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ScenarioLoadError(f"Scenario file not found: {file_path}")
    except UnicodeDecodeError as e:
        raise ScenarioLoadError(f"Scenario file is not valid UTF-8: {e}")
    except json.JSONDecodeError as e:
        raise ScenarioLoadError(f"Invalid JSON in scenario file: {e}")
    except OSError as e:
        raise ScenarioLoadError(f"Cannot read scenario file {file_path}: {e}")

    return parse_scenario(data, consumer_count, logger)


def parse_scenario(
    data: Any,
    consumer_count: int = DEFAULT_CONSUMER_COUNT,
    logger=None
) -> Tuple[ResourceSnapshot, List[Consumer]]:
    """
    Build a snapshot and consumer list from decoded scenario data.

    Raises:
        ScenarioLoadError: If required fields are missing or malformed
    """
    if not isinstance(data, dict):
        raise ScenarioLoadError("Scenario must be a JSON object")
    if 'resources' not in data:
        raise ScenarioLoadError("Scenario missing 'resources' field")
    if not isinstance(data['resources'], dict):
        raise ScenarioLoadError("Scenario 'resources' must be an object of kind counts")

    kinds = _load_kinds(data.get('kinds'))
    _warn_unknown(logger, "resources", data['resources'], kinds)
    total = build_counts(data['resources'], kinds)

    consumer_data_list = data.get('consumers', [])
    if not isinstance(consumer_data_list, list):
        raise ScenarioLoadError("Scenario 'consumers' must be a list")

    consumers = []
    for index, consumer_data in enumerate(consumer_data_list):
        consumers.append(_load_consumer(index, consumer_data, kinds, logger))
    consumers = pad_consumers(consumers, consumer_count)
    _check_count_range(total, [c.request for c in consumers], kinds)

    snapshot = ResourceSnapshot.from_counts(total, [c.request for c in consumers], kinds)
    return snapshot, consumers


def _load_kinds(kind_data: Optional[List[Dict]]) -> Tuple[ResourceKind, ...]:
    """
    Load resource kind definitions, defaulting to the four office kinds.

    Args:
        kind_data: List of {"key", "label"} dictionaries or None

    Returns:
        Ordered tuple of ResourceKind
    """
    if kind_data is None:
        return DEFAULT_RESOURCE_KINDS
    if not isinstance(kind_data, list):
        raise ScenarioLoadError("Scenario 'kinds' must be a list")

    kinds = []
    for entry in kind_data:
        if not isinstance(entry, dict) or not entry.get('key'):
            raise ScenarioLoadError("Resource kind missing 'key' field")
        kinds.append(ResourceKind(key=str(entry['key']), label=str(entry.get('label', ''))))

    try:
        return validate_kinds(kinds)
    except ValueError as e:
        raise ScenarioLoadError(str(e))


def _load_consumer(index: int, consumer_data: Any, kinds: Sequence[ResourceKind], logger=None) -> Consumer:
    """
    Load a single consumer from scenario data.

    A bare mapping of kind counts is accepted as an unnamed consumer.
    """
    if not isinstance(consumer_data, dict):
        raise ScenarioLoadError(f"Consumer {index + 1}: entry must be an object")

    if 'request' in consumer_data:
        request = consumer_data['request']
        if not isinstance(request, dict):
            raise ScenarioLoadError(f"Consumer {index + 1}: 'request' must be an object")
        name = str(consumer_data.get('name') or '')
    else:
        request = consumer_data
        name = ''

    _warn_unknown(logger, f"consumer {index + 1}", request, kinds)
    return Consumer(index=index, name=name, request=build_counts(request, kinds))


def parse_assignments(text: str) -> Dict[str, str]:
    """
    Parse "key=value,key=value" into a raw mapping.

    Raises:
        ScenarioLoadError: If an item has no "=" or an empty key
    """
    assignments = {}
    for item in text.split(','):
        item = item.strip()
        if not item:
            continue
        if '=' not in item:
            raise ScenarioLoadError(f"Expected key=value, got '{item}'")
        key, value = item.split('=', 1)
        key = key.strip()
        if not key:
            raise ScenarioLoadError(f"Missing resource name in '{item}'")
        assignments[key] = value.strip()
    return assignments


def parse_request_argument(text: str) -> Tuple[str, Dict[str, str]]:
    """
    Parse a command-line request of the form "[name:]key=value,...".

    Returns:
        Tuple of (name or "", raw request mapping)
    """
    name = ''
    body = text
    head, sep, tail = text.partition(':')
    if sep and '=' not in head:
        name, body = head.strip(), tail
    return name, parse_assignments(body)


def build_inline_scenario(
    total_text: Optional[str],
    request_texts: Sequence[str],
    consumer_count: int = DEFAULT_CONSUMER_COUNT,
    logger=None
) -> Tuple[ResourceSnapshot, List[Consumer]]:
    """
    Build a snapshot from --total and --request command-line values.

    Raises:
        ScenarioLoadError: If any value is malformed
    """
    data = {
        'resources': parse_assignments(total_text or ''),
        'consumers': [],
    }
    for text in request_texts:
        name, request = parse_request_argument(text)
        data['consumers'].append({'name': name, 'request': request})
    return parse_scenario(data, consumer_count, logger)


def _warn_unknown(logger, source: str, raw: Mapping[str, Any], kinds: Sequence[ResourceKind]) -> None:
    """Report keys that will be ignored because they name no resource kind."""
    if logger is None:
        return
    ignored = unknown_keys(raw, kinds)
    if ignored:
        logger.log(f"Ignoring unknown resource kinds in {source}: {', '.join(ignored)}", "warning")


def _check_count_range(
    total: Mapping[str, int],
    requests: Sequence[Mapping[str, int]],
    kinds: Sequence[ResourceKind]
) -> None:
    """
    Reject counts the int64 arrays cannot hold.

    For every kind, |total| plus the sum of all |request| values must fit
    in int64, which bounds On-Hold, Available and every intermediate Work
    value of the safety analysis.

    Raises:
        ScenarioLoadError: If any kind exceeds the bound
    """
    for kind in kinds:
        magnitude = abs(total[kind.key]) + sum(abs(request[kind.key]) for request in requests)
        if magnitude > MAX_COUNT:
            raise ScenarioLoadError(
                f"Counts for '{kind.key}' are too large (combined magnitude must be <= {MAX_COUNT})"
            )
