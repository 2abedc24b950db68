import json
import os
import threading
import uuid
from typing import Dict, List, Optional, Protocol, Tuple

from .constants import MAX_MEMORY_PITCHES
from .models import PitchRecord

try:
    import psycopg
    from psycopg.types.json import Jsonb
except Exception:  # pragma: no cover - only relevant when Postgres is enabled.
    psycopg = None
    Jsonb = None


def normalize_database_url(database_url: str) -> str:
    if database_url.startswith("postgres://"):
        return "postgresql://" + database_url[len("postgres://") :]
    return database_url


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


class PitchStore(Protocol):
    storage_name: str

    def save_pitch(self, record: PitchRecord) -> str:
        pass

    def list_pitches(self, *, page: int, limit: int) -> Tuple[List[PitchRecord], int]:
        pass

    def get_pitch(self, pitch_id: str) -> Optional[PitchRecord]:
        pass


class InMemoryPitchStore:
    """Process-local history for development; keeps the newest ``max_records`` saves."""

    storage_name = "memory"

    def __init__(self, max_records: int = MAX_MEMORY_PITCHES) -> None:
        self._pitches: Dict[str, PitchRecord] = {}
        self._max_records = max_records
        self._lock = threading.Lock()

    def save_pitch(self, record: PitchRecord) -> str:
        pitch_id = str(uuid.uuid4())
        record.pitch_id = pitch_id
        with self._lock:
            self._pitches[pitch_id] = record
            while len(self._pitches) > self._max_records:
                del self._pitches[next(iter(self._pitches))]
        return pitch_id

    def list_pitches(self, *, page: int, limit: int) -> Tuple[List[PitchRecord], int]:
        with self._lock:
            ordered = sorted(self._pitches.values(), key=lambda r: r.created_at, reverse=True)
        offset = (page - 1) * limit
        return ordered[offset : offset + limit], len(ordered)

    def get_pitch(self, pitch_id: str) -> Optional[PitchRecord]:
        with self._lock:
            return self._pitches.get(pitch_id)


class PostgresPitchStore:
    storage_name = "postgres"

    def __init__(self, database_url: str) -> None:
        if psycopg is None or Jsonb is None:
            raise RuntimeError("psycopg is required when DATABASE_URL is set.")
        self._database_url = normalize_database_url(database_url)
        self._ensure_schema()

    def _connect(self):
        return psycopg.connect(self._database_url, autocommit=True)

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    CREATE TABLE IF NOT EXISTS pitches (
                        pitch_id UUID PRIMARY KEY,
                        idea TEXT NOT NULL,
                        name TEXT NOT NULL,
                        elevator TEXT NOT NULL,
                        slides JSONB NOT NULL,
                        ip_address TEXT NOT NULL DEFAULT 'unknown',
                        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                    )
                    """
                )
                cur.execute(
                    """
                    CREATE INDEX IF NOT EXISTS idx_pitches_created_at
                    ON pitches (created_at DESC)
                    """
                )

    def save_pitch(self, record: PitchRecord) -> str:
        pitch_id = str(uuid.uuid4())
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO pitches (pitch_id, idea, name, elevator, slides, ip_address, created_at)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    """,
                    (
                        pitch_id,
                        record.idea,
                        record.name,
                        record.elevator,
                        Jsonb(record.slides),
                        record.ip_address,
                        record.created_at,
                    ),
                )
        record.pitch_id = pitch_id
        return pitch_id

    @staticmethod
    def _row_to_record(row) -> PitchRecord:
        pitch_id, idea, name, elevator, slides, ip_address, created_at = row
        if isinstance(slides, str):
            slides = json.loads(slides)
        return PitchRecord(
            idea=idea,
            name=name,
            elevator=elevator,
            slides=list(slides or []),
            created_at=created_at,
            ip_address=ip_address,
            pitch_id=str(pitch_id),
        )

    def list_pitches(self, *, page: int, limit: int) -> Tuple[List[PitchRecord], int]:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT pitch_id, idea, name, elevator, slides, ip_address, created_at
                    FROM pitches
                    ORDER BY created_at DESC
                    LIMIT %s OFFSET %s
                    """,
                    (limit, (page - 1) * limit),
                )
                rows = cur.fetchall()
                cur.execute("SELECT COUNT(*) FROM pitches")
                total = cur.fetchone()[0]
        return [self._row_to_record(row) for row in rows], int(total)

    def get_pitch(self, pitch_id: str) -> Optional[PitchRecord]:
        if not _is_uuid(pitch_id):
            return None
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT pitch_id, idea, name, elevator, slides, ip_address, created_at
                    FROM pitches
                    WHERE pitch_id = %s
                    """,
                    (pitch_id,),
                )
                row = cur.fetchone()
        if row is None:
            return None
        return self._row_to_record(row)


def build_pitch_store() -> PitchStore:
    database_url = os.getenv("DATABASE_URL", "").strip()
    if database_url:
        return PostgresPitchStore(database_url=database_url)
    return InMemoryPitchStore()
