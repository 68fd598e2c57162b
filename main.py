#!/usr/bin/env python3
"""
Threads.io Writer for Keboola

This component reads rows from a Keboola input table and sends each row to
Threads.io as one API call.

Configuration:
- #THREADSIO_EVENT_KEY: Threads.io event key (encrypted)
- endpoint: Base URL override (optional)
- mock: true to run without calling the API (default: false)

Input table columns:
- action: identify, track, page or remove
- user_id: Your identifier for the user
- event: Event name (track)
- name: Page name (page)
- properties: JSON object; traits for identify, properties for track/page
- timestamp: ISO-8601 timestamp with offset (optional, default: now)

State file tracks:
- sent_count / failed_count of the last run
"""

import csv
import json
import logging
import sys
from datetime import datetime

from keboola.component import CommonInterface

from threadsio_driver import (
    ThreadsIoClient,
    ThreadsIoError,
    InvalidKeyError,
    PlugError,
    Response,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def parse_timestamp(value):
    """Parse an ISO-8601 column value; empty means "now"."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise PlugError(
            f"Invalid timestamp '{value}'. Expected ISO-8601 with offset.",
            details={"parameter": "timestamp", "provided": value}
        ) from e


def parse_properties(value):
    """Decode the JSON properties column; empty means no properties."""
    if not value:
        return {}
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise PlugError(
            f"Invalid properties JSON: {e}",
            details={"parameter": "properties", "provided": value[:200]}
        ) from e


def dispatch_row(client: ThreadsIoClient, row: dict) -> Response:
    """
    Send one input row to Threads.io.

    Raises:
        PlugError: Unknown action or malformed column values
        ThreadsIoError: Any API failure
    """
    action = (row.get('action') or '').strip().lower()
    user_id = row.get('user_id', '')
    timestamp = parse_timestamp(row.get('timestamp'))

    if action == ThreadsIoClient.REMOVE_ACTION:
        return client.remove(user_id, timestamp)

    properties = parse_properties(row.get('properties'))

    if action == ThreadsIoClient.IDENTIFY_ACTION:
        return client.identify(user_id, properties, timestamp)
    if action == ThreadsIoClient.TRACK_ACTION:
        return client.track(user_id, row.get('event', ''), properties, timestamp)
    if action == ThreadsIoClient.VISIT_ACTION:
        return client.page(user_id, row.get('name', ''), properties, timestamp)

    raise PlugError(
        f"Unknown action '{action}'. Expected identify, track, page or remove.",
        details={"parameter": "action", "provided": action}
    )


def send_rows(client: ThreadsIoClient, rows) -> dict:
    """
    Send rows one by one.

    Row-level failures are logged and counted; an InvalidKeyError stops the
    run since every following call would be rejected too.

    Returns:
        {"sent_count": ..., "failed_count": ...}
    """
    sent_count = 0
    failed_count = 0

    for row_number, row in enumerate(rows, start=1):
        try:
            response = dispatch_row(client, row)
        except InvalidKeyError as e:
            logger.error(f"Row {row_number}: {e}. Stopping.")
            raise
        except ThreadsIoError as e:
            logger.error(f"✗ Row {row_number} failed: {e}")
            failed_count += 1
            continue

        if response.success:
            sent_count += 1
        else:
            logger.warning(f"Row {row_number}: API did not acknowledge the call: {response.data}")
            failed_count += 1

    return {"sent_count": sent_count, "failed_count": failed_count}


def write_table_to_threadsio(ci, client):
    """
    Read the first input table and send its rows to Threads.io

    Returns:
        Counts of sent and failed rows
    """
    input_tables = ci.get_input_tables_definitions()
    if not input_tables:
        logger.warning("No input tables found, nothing to send")
        return {"sent_count": 0, "failed_count": 0}

    input_table = input_tables[0]
    logger.info(f"Reading from input table: {input_table.name}")

    with open(input_table.full_path, 'r', encoding='utf-8') as f:
        counts = send_rows(client, csv.DictReader(f))

    logger.info(f"✓ Sent {counts['sent_count']} rows, {counts['failed_count']} failed")
    return counts


def main():
    """Main entry point for Keboola component"""
    try:
        ci = CommonInterface()
        logger.info("✓ Keboola CommonInterface initialized")

        parameters = ci.configuration.parameters
        mock = bool(parameters.get('mock', False))

        event_key = parameters.get('#THREADSIO_EVENT_KEY')
        if not event_key and not mock:
            logger.error("Missing required parameter: #THREADSIO_EVENT_KEY")
            raise ValueError("Missing #THREADSIO_EVENT_KEY")

        logger.info("Configuration loaded:")
        logger.info(f"  - Endpoint: {parameters.get('endpoint') or ThreadsIoClient.END_POINT}")
        logger.info(f"  - Mock: {mock}")

        with ThreadsIoClient(event_key or "", end_point=parameters.get('endpoint'), mock=mock) as client:
            counts = write_table_to_threadsio(ci, client)

        ci.write_state_file({
            **counts,
            "last_run": datetime.now().isoformat(),
        })
        logger.info("✓ Component execution completed successfully")

        return 0

    except Exception as e:
        logger.exception(f"Component execution failed: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
