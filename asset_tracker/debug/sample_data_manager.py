"""
Sample Data Manager
Loads the bundled sample assets and check-in/out records.

Used as the load default when ASSET_TRACKER_SEED_SAMPLE_DATA is enabled, so a
fresh store starts with a few assets to look at.
"""

from pathlib import Path
import json
from typing import List, Tuple

from asset_tracker.data.core.asset_info.asset import Asset
from asset_tracker.data.core.event_info.check_in_out_record import CheckInOutRecord
from asset_tracker.utils.logger import get_logger

logger = get_logger("asset_tracker.debug.sample_data")

SAMPLE_DATA_FILE = Path(__file__).parent / 'data' / 'sample_data.json'


def _load_sample_data_file(path: Path = SAMPLE_DATA_FILE) -> dict:
    """
    Load the sample data JSON file

    Returns:
        dict: Raw sample data, empty if the file does not exist
    """
    if not path.exists():
        logger.info(f"No sample data file at {path}")
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        logger.debug(f"Loaded sample data file: {path}")
        return data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path}: {e}")
        raise


def load_sample_data(path: Path = SAMPLE_DATA_FILE) -> Tuple[List[Asset], List[CheckInOutRecord]]:
    """
    Parse the sample data into model instances

    Returns:
        tuple: (assets, records)
    """
    data = _load_sample_data_file(path)
    assets = [Asset.from_dict(item) for item in data.get('assets', [])]
    records = [CheckInOutRecord.from_dict(item) for item in data.get('records', [])]
    logger.info(f"Sample data: {len(assets)} assets, {len(records)} records")
    return assets, records
