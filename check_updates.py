#!/usr/bin/env python3
import argparse
import os
import sys
from task_updates.errors import TaskUpdatesError
from task_updates.services.update_report_service import UpdateReportService
from task_updates.utils.logging import setup_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Report running Nomad tasks whose image has a newer tag")
    parser.add_argument('--config', default=os.environ.get("CONFIG_FILE", "./config.yaml"), help='Path to the YAML config file')
    parser.add_argument('--server', default=None, help='Nomad address, overrides the config file')
    parser.add_argument('--namespace', action='append', dest='namespaces', help='Namespace to scan, repeatable; "*" scans all')
    parser.add_argument('--output', choices=["table", "json"], default="table", help='Report format')
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logger = setup_logger("CheckUpdates")
    try:
        logger.info(f"Starting update check with config file: {args.config}")
        service = UpdateReportService(args.config, server=args.server, namespaces=args.namespaces, output=args.output)
        service.run()
        logger.info("Update check completed successfully")
        return 0
    except TaskUpdatesError as e:
        logger.error(f"Update check failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
