#!/usr/bin/env python3
"""Seed CCB operations with generated sample data.

By default the operations are written to PostgreSQL using the connection
settings from the environment (``POSTGRES_*``). With ``--dry-run`` they are
validated and printed as JSON instead.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ccb_ops.config import AppConfig
from ccb_ops.exceptions import CCBOpsError
from ccb_ops.generators import OperationGenerator
from ccb_ops.lifecycle import OperationController
from ccb_ops.logging import setup_logging
from ccb_ops.models.operation import validate_operation_input
from ccb_ops.serialization import to_dict
from ccb_ops.store import PostgresRecordStore

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed CCB operations with sample data")
    parser.add_argument("--count", type=int, default=50, help="Number of operations to generate")
    parser.add_argument("--owner", required=True, help="User id that will own the operations")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--dry-run", action="store_true", help="Print JSON instead of writing")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    config = AppConfig.from_env()
    setup_logging(config.log_level, config.log_format)

    seed = args.seed if args.seed is not None else config.seed
    generator = OperationGenerator(seed=seed)
    forms = list(generator.generate_batch(args.count))

    if args.dry_run:
        payloads = [to_dict(validate_operation_input(form)) for form in forms]
        print(json.dumps(payloads, indent=2, ensure_ascii=False))
        return 0

    try:
        store = PostgresRecordStore(config.postgres.connection_string)
    except CCBOpsError as e:
        logger.error("Cannot open store: %s", e)
        return 1

    controller = OperationController(store, table=config.tables.operations)
    created = 0
    try:
        for form in forms:
            controller.create(args.owner, form)
            created += 1
    except CCBOpsError as e:
        logger.error("Stopped after %d operations: %s", created, e)
        return 1
    finally:
        store.close()

    logger.info("Seeded %d operations owned by %s", created, args.owner)
    return 0


if __name__ == "__main__":
    sys.exit(main())
