# utils/trace_reader.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# CSV trace file reader for node event sequences

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from core.event import EventType
from utils.clock_codec import is_encodable_id
from utils.logger import get_logger

NODES_DIRECTIVE = "# nodes:"
REQUIRED_HEADERS = {"eid", "node", "type", "source"}


class TraceFormatError(Exception):
    """Exception raised when trace files contain invalid format or data."""

    pass


@dataclass(frozen=True, slots=True)
class TraceRecord:
    """One row of a causal trace.

    Attributes:
        eid: Unique event identifier
        node: Id of the node the event occurs at
        event_type: LOCAL, SEND or RECEIVE
        source: For RECEIVE, the eid of the SEND whose clock the message carried
    """

    eid: str
    node: str
    event_type: EventType
    source: Optional[str] = None

    def __str__(self) -> str:
        suffix = f"<-{self.source}" if self.source else ""
        return f"{self.eid}@{self.node}:{self.event_type.name.lower()}{suffix}"


def read_trace(filepath: str) -> Iterator[TraceRecord]:
    """Read records from a CSV trace file.

    Expected CSV format:
        # nodes: a|b|c
        eid,node,type,source
        e1,a,local,
        e2,c,send,
        e3,b,receive,e2

    The ``# nodes:`` directive is optional.

    Args:
        filepath: Path to the CSV trace file

    Yields:
        TraceRecord: Parsed records in file order

    Raises:
        TraceFormatError: If file format is invalid or records cannot be parsed
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        raise TraceFormatError(f"Trace file not found: {filepath}")

    logger.debug(f"Reading trace file: {filepath}")

    try:
        with open(path, "r", newline="", encoding="utf-8") as file:
            first_line = file.readline().strip()
            has_directive = first_line.startswith(NODES_DIRECTIVE)
            if not has_directive:
                file.seek(0)

            reader = csv.DictReader(file)

            if reader.fieldnames:
                reader.fieldnames = [name.strip() for name in reader.fieldnames]
            fieldnames = set(reader.fieldnames or [])
            if not REQUIRED_HEADERS.issubset(fieldnames):
                missing = REQUIRED_HEADERS - fieldnames
                raise TraceFormatError(f"Missing required headers: {sorted(missing)}")

            # Row numbers count physical lines, header included
            first_row = 3 if has_directive else 2
            for row_num, row in enumerate(reader, start=first_row):
                try:
                    record = _parse_record_row(row)
                except TraceFormatError as e:
                    raise TraceFormatError(f"Error parsing row {row_num}: {e}") from e
                logger.debug(f"Parsed record {record} from row {row_num}")
                yield record

    except TraceFormatError:
        raise
    except OSError as e:
        raise TraceFormatError(f"Cannot open trace file: {filepath}: {e}") from e
    except csv.Error as e:
        raise TraceFormatError(f"Error reading trace file: {e}") from e


def get_trace_nodes(filepath: str) -> List[str]:
    """Extract the node list from the trace file directive.

    Args:
        filepath: Path to the trace file

    Returns:
        List of node ids in directive order, empty if no directive found
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        return []

    try:
        with open(path, "r", encoding="utf-8") as file:
            first_line = file.readline().strip()
    except OSError as e:
        logger.debug(f"Could not read nodes directive: {e}")
        return []

    if not first_line.startswith(NODES_DIRECTIVE):
        return []

    nodes_str = first_line[len(NODES_DIRECTIVE):].strip()
    nodes = [n.strip() for n in nodes_str.split("|") if n.strip()]
    logger.debug(f"Found nodes directive: {nodes}")
    return nodes


def validate_trace_file(filepath: str) -> int:
    """Validate trace file format by parsing every record.

    Args:
        filepath: Path to the trace file to validate

    Returns:
        Number of records in the trace

    Raises:
        TraceFormatError: If validation fails
    """
    logger = get_logger()
    logger.debug(f"Validating trace file: {filepath}")

    count = sum(1 for _ in read_trace(filepath))
    logger.debug(f"Trace validation successful: {count} records")
    return count


def _parse_record_row(row: dict) -> TraceRecord:
    """Parse a single CSV row into a TraceRecord.

    Raises:
        TraceFormatError: If row data is invalid
    """
    eid = (row.get("eid") or "").strip()
    node = (row.get("node") or "").strip()
    type_str = (row.get("type") or "").strip()
    source = (row.get("source") or "").strip() or None

    if not eid:
        raise TraceFormatError("Empty eid field")
    if not node:
        raise TraceFormatError(f"Empty node field for event {eid}")
    if not is_encodable_id(node):
        raise TraceFormatError(f"Node id {node!r} for event {eid} may not contain ':' or ';'")

    event_type = _parse_event_type(type_str)

    if event_type is EventType.RECEIVE and source is None:
        raise TraceFormatError(f"Receive event {eid} must name its source send event")
    if event_type is not EventType.RECEIVE and source is not None:
        raise TraceFormatError(f"Only receive events may name a source (event {eid})")

    return TraceRecord(eid=eid, node=node, event_type=event_type, source=source)


def _parse_event_type(type_str: str) -> EventType:
    try:
        return EventType[type_str.upper()]
    except KeyError:
        raise TraceFormatError(f"Unknown event type: {type_str!r}") from None
