import random
from collections import Counter
from uuid import UUID

from metaai.client.identifiers import (
    THREADING_ID_LENGTH,
    generate_conversation_id,
    generate_threading_id,
)


def test_threading_id_shape():
    rng = random.Random(1234)
    for _ in range(2000):
        value = generate_threading_id(rng)
        assert len(value) == THREADING_ID_LENGTH == 19
        assert value.isdigit()
        assert value[0] not in {"0", "9"}


def test_threading_id_rejects_reserved_leading_digits():
    class ScriptedRandom:
        """Yields a full candidate starting with 0, then one starting with 9, then a valid one."""

        def __init__(self) -> None:
            self.digits = iter("0" * 19 + "9" * 19 + "5" + "1" * 18)
            self.draws = 0

        def choice(self, sequence):
            self.draws += 1
            return next(self.digits)

    rng = ScriptedRandom()

    assert generate_threading_id(rng) == "5" + "1" * 18
    assert rng.draws == 57


def test_threading_id_leading_digits_are_spread_evenly():
    rng = random.Random(99)
    counts = Counter(generate_threading_id(rng)[0] for _ in range(8000))

    assert set(counts) == set("12345678")
    # Each allowed leading digit should land near 1/8 of the draws.
    assert all(700 < count < 1300 for count in counts.values())


def test_threading_id_uses_module_random_by_default(monkeypatch):
    monkeypatch.setattr("metaai.client.identifiers.random.choice", lambda sequence: "3")

    assert generate_threading_id() == "3" * 19


def test_conversation_id_is_uuid4():
    first = generate_conversation_id()
    second = generate_conversation_id()

    assert UUID(first).version == 4
    assert first != second
