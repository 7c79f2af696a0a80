import pytest

from fakes import Recorder
from funcflow import default_key, memoize, once, once_changed


def test_once_ignores_later_arguments():
    fn = Recorder()
    first = once(fn)

    assert first(1) == "result-1"
    assert first(2) == "result-1"
    assert fn.calls == [((1,), {})]
    assert first.ran


def test_once_does_not_cache_errors():
    attempts = 0

    def load() -> str:
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            raise ValueError("not yet")
        return "loaded"

    load_once = once(load)
    with pytest.raises(ValueError):
        load_once()
    assert not load_once.ran

    assert load_once() == "loaded"
    assert load_once() == "loaded"
    assert attempts == 2


def test_once_works_as_decorator():
    @once
    def settings() -> dict[str, int]:
        return {"retries": 3}

    assert settings() is settings()
    assert settings.__name__ == "settings"


def test_once_changed_compares_only_previous_call():
    fn = Recorder()
    changed = once_changed(fn)

    results = [changed(key) for key in ["a", "a", "b", "b", "a"]]

    assert fn.count == 3
    assert [args for args, _ in fn.calls] == [("a",), ("b",), ("a",)]
    assert results == ["result-1", "result-1", "result-2", "result-2", "result-3"]


def test_once_changed_custom_key():
    fn = Recorder()
    changed = once_changed(fn, key=lambda path, **_: path.lower())

    changed("/Tmp")
    changed("/tmp", verbose=True)
    changed("/var")

    assert fn.count == 2


def test_memoize_caches_per_key():
    fn = Recorder()
    cached = memoize(fn)

    assert cached("x") == cached("x")
    assert fn.count == 1

    assert cached("y") == "result-2"
    assert fn.count == 2
    assert cached.size == 2
    assert dict(cached.cache) == {"x": "result-1", "y": "result-2"}


def test_memoize_caches_none():
    calls = 0

    def lookup(_: str) -> None:
        nonlocal calls
        calls += 1
        return None

    cached = memoize(lookup)
    assert cached("missing") is None
    assert cached("missing") is None
    assert calls == 1


def test_memoize_does_not_cache_errors():
    attempts = 0

    def parse(text: str) -> int:
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            raise ValueError(text)
        return int(text)

    cached = memoize(parse)
    with pytest.raises(ValueError):
        cached("7")
    assert cached.size == 0

    assert cached("7") == 7
    assert cached("7") == 7
    assert attempts == 2


def test_memoize_default_key_collides_on_text():
    fn = Recorder()
    cached = memoize(fn)

    cached(1)
    cached("1")

    assert fn.count == 1


def test_memoize_custom_key_avoids_text_collisions():
    fn = Recorder()
    cached = memoize(fn, key=lambda *args: tuple((type(a), a) for a in args))

    cached(1)
    cached("1")

    assert fn.count == 2


def test_memoize_cache_view_is_read_only():
    cached = memoize(Recorder())
    cached("a")

    with pytest.raises(TypeError):
        cached.cache["b"] = "forged"  # type: ignore[index]


def test_default_key():
    assert default_key() == ""
    assert default_key(1, "a", None) == "1:a:None"
    assert default_key("a", z=2, b=1) == "a:b=1:z=2"


def test_memoizers_compose_by_nesting():
    fn = Recorder()
    cached = memoize(once(fn))

    assert cached("a") == "result-1"
    assert cached("b") == "result-1"
    assert fn.count == 1
    assert cached.size == 2
