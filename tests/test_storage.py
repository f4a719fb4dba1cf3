from concurrent.futures import ThreadPoolExecutor

import storage


def test_concurrent_grade_writes_are_all_kept():
    klass = storage.create_class("alice", {"name": "Chemistry"})

    def add(i):
        storage.create_grade("alice", klass["id"], {
            "title": f"HW {i}", "points_earned": i, "points_possible": 10,
        })

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(add, range(40)))

    assert len(storage.list_grades("alice", klass["id"])) == 40


def test_concurrent_preference_merges_are_all_kept():
    def merge(i):
        storage.merge_preferences("alice", {f"key{i}": i})

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(merge, range(20)))

    assert len(storage.load_settings("alice")["preferences"]) == 20


def test_load_settings_defaults():
    assert storage.load_settings("nobody") == {"display_name": "", "preferences": {}}
