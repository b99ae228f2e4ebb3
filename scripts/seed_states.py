# scripts/seed_states.py
"""
Load data/states.csv into the states table (idempotent, upsert by UF).

Usage:
    python -m scripts.init_db
    python -m scripts.seed_states [path/to/states.csv]
"""

import logging
import sys
from pathlib import Path

from catalog.config import Settings
from catalog.db.engine import get_engine
from catalog.db.schema import metadata
from catalog.db.seed import STATES_CSV, load_states, parse_states_csv

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    file_path = Path(sys.argv[1]) if len(sys.argv) > 1 else STATES_CSV
    states_list, stats = parse_states_csv(file_path)

    engine = get_engine(Settings.from_env().database_url)
    metadata.create_all(engine)
    load_states(engine, states_list)

    logger.info(f"Total CSV rows read:   {stats['n_rows']}")
    logger.info(f"Unique states:         {stats['n_states']}")
    logger.info(f"Rows with errors:      {stats['n_errors']}")

    if stats["error_examples"]:
        logger.warning("Example errors:")
        for ex in stats["error_examples"]:
            logger.warning("Row %s: %s", ex["row_number"], ex["row"])


if __name__ == "__main__":
    main()
