"""
Named sequences for human-readable record numbers (PUR-1, STR-1, LOG-1)
"""
from sqlalchemy.orm import Session

from garment_erp.models.auth import Counter


def next_sequence(db: Session, name: str) -> int:
    """
    Increment and return the named counter

    Runs inside the caller's transaction; the row lock serialises
    concurrent callers on databases that support SELECT ... FOR UPDATE.
    """
    counter = db.query(Counter).filter(Counter.name == name).with_for_update().first()
    if counter is None:
        counter = Counter(name=name, seq=0)
        db.add(counter)
    counter.seq = (counter.seq or 0) + 1
    db.flush()
    return counter.seq
