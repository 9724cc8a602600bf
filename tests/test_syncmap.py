import threading

from imtools.syncmap import (
    SyncMap,
    get_switch_from_options,
    json_string_to_map,
    map_to_json_string,
    set_switch_from_options,
)


def test_set_and_get():
    m = SyncMap()
    m.set("a", 1)
    assert m.get("a") == 1
    assert m.get("missing") is None
    assert len(m) == 1


def test_test_and_set_keeps_existing():
    m = SyncMap()
    assert m.test_and_set("k", "first") is None
    assert m.test_and_set("k", "second") == "first"
    assert m.get("k") == "first"


def test_delete():
    m = SyncMap()
    m.set("k", 1)
    m.delete("k")
    m.delete("never")
    assert "k" not in m
    assert len(m) == 0


def test_range_visits_all():
    m = SyncMap()
    for i in range(5):
        m.set(i, i * 10)
    seen = {}
    m.range(lambda k, v: seen.__setitem__(k, v))
    assert seen == {i: i * 10 for i in range(5)}


def test_concurrent_test_and_set_has_one_winner():
    m = SyncMap()
    winners = []
    lock = threading.Lock()

    def worker(n):
        if m.test_and_set("key", n) is None:
            with lock:
                winners.append(n)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(winners) == 1
    assert m.get("key") == winners[0]


def test_map_to_json_string_sorted_compact():
    assert map_to_json_string({"b": 1, "a": "x"}) == '{"a":"x","b":1}'


def test_map_to_json_string_none():
    assert map_to_json_string(None) == "null"


def test_json_round_trip():
    data = {"x": 1, "y": -2}
    assert json_string_to_map(map_to_json_string(data)) == data


def test_json_string_to_map_invalid():
    assert json_string_to_map("not json") is None
    assert json_string_to_map("null") is None


def test_switches():
    assert get_switch_from_options(None, "a") is True
    assert get_switch_from_options({}, "a") is True
    assert get_switch_from_options({"a": True}, "a") is True
    assert get_switch_from_options({"a": False}, "a") is False


def test_set_switch():
    options = {}
    set_switch_from_options(options, "a", False)
    assert get_switch_from_options(options, "a") is False
    set_switch_from_options(None, "a", False)
    assert get_switch_from_options(None, "a") is True