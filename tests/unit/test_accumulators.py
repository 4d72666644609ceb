import threading

from salarybench.reducers.accumulators import AtomicCounter, MaxRegister

WORKERS = 16
ADDS_PER_WORKER = 500


def test_get_and_add_returns_previous_value():
    counter = AtomicCounter(5)

    assert counter.get_and_add(3) == 5
    assert counter.get() == 8


def test_counter_survives_contention():
    counter = AtomicCounter()

    def hammer():
        for _ in range(ADDS_PER_WORKER):
            counter.get_and_add(1)

    threads = [threading.Thread(target=hammer) for _ in range(WORKERS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert counter.get() == WORKERS * ADDS_PER_WORKER


def test_register_only_grows():
    register = MaxRegister()

    assert register.update(10) is True
    assert register.update(3) is False
    assert register.update(10) is False
    assert register.get() == 10


def test_unguarded_register_has_same_single_threaded_semantics():
    register = MaxRegister(guarded=False)

    for value in (4, 9, 2):
        register.update(value)

    assert register.get() == 9


def test_register_seeded_at_zero_ignores_negatives():
    # Seeding at 0 is only a valid max when every input is non-negative.
    register = MaxRegister()
    register.update(-7)

    assert register.get() == 0
