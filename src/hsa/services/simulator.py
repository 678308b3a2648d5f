"""Sample purchases for the randomized transaction simulator."""

import json
import random
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from hsa.core.money import to_money

SAMPLE_TRANSACTIONS_PATH = Path(__file__).resolve().parent.parent / "data" / "sample_transactions.json"


@dataclass(frozen=True)
class SampleTransaction:
    merchant: str
    amount: Decimal
    category: str
    mcc: str | None = None


@lru_cache
def load_sample_transactions(path: Path = SAMPLE_TRANSACTIONS_PATH) -> tuple[SampleTransaction, ...]:
    """Load and cache the sample purchase list."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    return tuple(
        SampleTransaction(
            merchant=item["merchant"],
            amount=to_money(item["amount"]),
            category=item["category"],
            mcc=item.get("mcc"),
        )
        for item in raw
    )


def pick_sample(rng: random.Random | None = None) -> SampleTransaction:
    """Pick one sample purchase uniformly at random."""
    samples = load_sample_transactions()
    return (rng or random).choice(samples)
