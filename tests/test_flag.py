import threading

import pytest

from todo_service.todo import FeatureDisabledError, FlagGate


def test_flag_starts_disabled():
    assert FlagGate().is_enabled() is False


def test_toggle_flips_state():
    flag = FlagGate()
    assert flag.toggle() is True
    assert flag.is_enabled() is True
    assert flag.toggle() is False
    assert flag.is_enabled() is False


def test_disable_forces_disabled():
    flag = FlagGate(enabled=True)
    flag.disable()
    assert flag.is_enabled() is False
    flag.disable()
    assert flag.is_enabled() is False


def test_ensure_enabled_raises_when_disabled():
    flag = FlagGate()
    with pytest.raises(FeatureDisabledError) as exc_info:
        flag.ensure_enabled()
    assert exc_info.value.status_code == 403
    assert exc_info.value.message == "Endpoint disabled"

    flag.toggle()
    flag.ensure_enabled()


def test_concurrent_toggles_are_not_lost():
    flag = FlagGate()
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        for _ in range(125):
            flag.toggle()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    # 1000 次翻转是偶数，应回到初始状态
    assert flag.is_enabled() is False
