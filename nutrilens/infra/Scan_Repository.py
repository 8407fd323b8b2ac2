import logging
from typing import List

from nutrilens.domain.RecentScan import RecentScan
from nutrilens.infra.Storage import load_json, save_json
from nutrilens.utilities.constants import MAX_RECENT_SCANS, RECENT_SCANS_KEY

logger = logging.getLogger(__name__)


class ScanRepository:
    """Capped, most-recent-first list of barcode scans."""

    def __init__(self, storage, limit: int = MAX_RECENT_SCANS):
        self.storage = storage
        self.limit = limit

    def list(self) -> List[RecentScan]:
        raw = load_json(self.storage, RECENT_SCANS_KEY, [])
        if not isinstance(raw, list):
            logger.warning("Stored recent scans are not a list; ignoring them")
            return []
        scans = []
        for entry in raw:
            try:
                scans.append(RecentScan.from_dict(entry))
            except (ValueError, TypeError) as e:
                logger.warning(f"Skipping malformed recent scan: {e}")
        scans.sort(key=lambda s: s.date, reverse=True)
        return scans[:self.limit]

    def record(self, scan: RecentScan) -> List[RecentScan]:
        """Replace an existing scan of the same barcode in place, otherwise prepend and trim."""
        with self.storage.lock:
            scans = self.list()
            for i, existing in enumerate(scans):
                if existing.id == scan.id:
                    scans[i] = scan
                    break
            else:
                scans = [scan] + scans[:self.limit - 1]
            save_json(self.storage, RECENT_SCANS_KEY, [s.to_dict() for s in scans])
        return scans
