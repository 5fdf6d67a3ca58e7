import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from kigaers.exceptions import PersistenceError
from kigaers.schemas.paper import Paper

logger = logging.getLogger(__name__)

STORAGE_KEY = "kigaers_likedPapers"


class LikedPaperStore:
    """Papers the user accepted, in insertion order, optionally mirrored to a JSON file.

    Nothing is written until ``load()`` has finished, so an empty store never
    overwrites a saved library that has not been read yet. Papers added before
    that are kept and merged behind the saved ones.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else None
        self._papers: List[Paper] = []
        self._loaded = self.path is None

    @property
    def loaded(self) -> bool:
        return self._loaded

    def __len__(self) -> int:
        return len(self._papers)

    def load(self) -> None:
        """Read the saved library. Missing or broken data means an empty library."""
        if self.path is None:
            self._loaded = True
            return
        pending = self._papers
        try:
            saved = self._read()
        except PersistenceError as e:
            logger.warning(f"Failed to load liked papers, starting empty: {e}")
            saved = []
            self._discard()

        saved_ids = {p.id for p in saved}
        added = [p for p in pending if p.id not in saved_ids]
        self._papers = saved + added
        self._loaded = True
        if added:
            logger.info(f"Merged {len(added)} papers liked before the library was loaded")
            self._save()

    def _read(self) -> List[Paper]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Cannot read {self.path}: {e}") from e

        items = data.get(STORAGE_KEY) if isinstance(data, dict) else None
        if items is None:
            return []
        if not isinstance(items, list) or not all(
            isinstance(p, dict) and isinstance(p.get("id"), str) and isinstance(p.get("title"), str)
            for p in items
        ):
            raise PersistenceError("Saved liked papers are not in the expected format")
        try:
            return [Paper.model_validate(p) for p in items]
        except ValidationError as e:
            raise PersistenceError(f"Invalid saved paper: {e}") from e

    def _discard(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove unreadable liked papers file: {e}")

    def _write(self) -> None:
        payload = {STORAGE_KEY: [p.to_json_dict() for p in self._papers]}
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as e:
            raise PersistenceError(f"Cannot write {self.path}: {e}") from e

    def _save(self) -> None:
        if self.path is None or not self._loaded:
            return
        try:
            self._write()
        except PersistenceError as e:
            logger.error(f"Failed to save liked papers: {e}")

    def add(self, paper: Paper) -> bool:
        """Append unless already present. Placeholders are never stored."""
        if paper.is_end_of_feed or self.contains(paper.id):
            return False
        self._papers.append(paper)
        self._save()
        return True

    def remove(self, paper_id: str) -> bool:
        before = len(self._papers)
        self._papers = [p for p in self._papers if p.id != paper_id]
        if len(self._papers) == before:
            return False
        self._save()
        return True

    def contains(self, paper_id: str) -> bool:
        """Before ``load()`` this only knows about papers added in this session."""
        return any(p.id == paper_id for p in self._papers)

    def get(self, paper_id: str) -> Optional[Paper]:
        for paper in self._papers:
            if paper.id == paper_id:
                return paper
        return None

    def list(self) -> List[Paper]:
        return list(self._papers)

    def update_summary(self, paper_id: str, summary: str) -> bool:
        paper = self.get(paper_id)
        if paper is None:
            return False
        paper.ai_summary = summary
        self._save()
        return True

    def clear(self) -> None:
        self._papers = []
        self._save()
