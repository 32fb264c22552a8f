import io
import threading

from parselib.api import read_stream
from parselib.classifier import ValueKind
from parselib.store import ConfigStore


def test_store_thread_safety_smoke() -> None:
    store = ConfigStore()
    errors: list[Exception] = []

    def worker(index: int) -> None:
        try:
            for step in range(200):
                key = f"K{index}_{step}"
                store.add(key, step)
                store.add(f"F{index}", float(step))
                assert store.check(key, ValueKind.INT)
                assert store.get_int(key) == step
                if step % 50 == 0:
                    store.dump()
        except Exception as exc:  # noqa: BLE001
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(index,)) for index in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert not errors
    assert len(store.keys(ValueKind.INT)) == 8 * 200
    assert len(store.keys(ValueKind.FLOAT)) == 8


def test_concurrent_loads_share_one_store() -> None:
    store = ConfigStore()
    errors: list[Exception] = []

    def worker(index: int) -> None:
        text = "".join(f"T{index}_{line} {line}\n" for line in range(50))
        result = read_stream(io.StringIO(text), store=store)
        if result.error is not None:
            errors.append(result.error)

    threads = [threading.Thread(target=worker, args=(index,)) for index in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert not errors
    assert len(store) == 4 * 50


def test_transaction_makes_check_then_add_atomic() -> None:
    store = ConfigStore()
    winners: list[int] = []

    def worker(index: int) -> None:
        with store.transaction():
            if not store.check_string("OWNER"):
                store.add("OWNER", str(index))
                winners.append(index)

    threads = [threading.Thread(target=worker, args=(index,)) for index in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(winners) == 1
    assert store.get_string("OWNER") == str(winners[0])
