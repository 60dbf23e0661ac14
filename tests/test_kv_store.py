import json

import pytest

from registry.kv_store import JsonFileStore, MemoryStore


def test_put_get_delete():
    store = MemoryStore()
    assert store.get('a') is None
    store.put('a', b'1')
    assert store.get('a') == b'1'
    assert store.contains('a')
    store.delete('a')
    assert not store.contains('a')


def test_storage_usage_counts_keys_and_values():
    store = MemoryStore()
    store.put('ab', b'123')
    store.put('c', b'')
    assert store.storage_usage() == 2 + 3 + 1
    store.delete('ab')
    assert store.storage_usage() == 1


def test_transaction_commits_on_success():
    store = MemoryStore()
    with store.transaction():
        store.put('a', b'1')
        store.delete('missing')
        # Reads see pending writes
        assert store.get('a') == b'1'
        assert store.storage_usage() == 2
    assert store.get('a') == b'1'


def test_transaction_rolls_back_on_error():
    store = MemoryStore()
    store.put('kept', b'x')

    with pytest.raises(KeyError):
        with store.transaction():
            store.put('a', b'1')
            store.delete('kept')
            raise KeyError('boom')

    assert store.get('a') is None
    assert store.get('kept') == b'x'


def test_nested_transaction_joins_outer():
    store = MemoryStore()
    with pytest.raises(ValueError):
        with store.transaction():
            with store.transaction():
                store.put('inner', b'1')
            assert store.get('inner') == b'1'
            raise ValueError()
    assert store.get('inner') is None


def test_json_file_store_persists(tmp_path):
    path = tmp_path / 'nested' / 'state.json'
    store = JsonFileStore(path)
    with store.transaction():
        store.put('u:alice', b'key')
        store.put('d:alice', b'{"wins":0}')

    assert json.loads(path.read_text(encoding='utf-8')) == {
        'd:alice': '{"wins":0}',
        'u:alice': 'key',
    }

    reopened = JsonFileStore(path)
    assert reopened.get('u:alice') == b'key'
    reopened.delete('u:alice')
    assert JsonFileStore(path).get('u:alice') is None


def test_json_file_store_rollback_does_not_touch_file(tmp_path):
    path = tmp_path / 'state.json'
    store = JsonFileStore(path)
    with pytest.raises(RuntimeError):
        with store.transaction():
            store.put('a', b'1')
            raise RuntimeError()
    assert not path.exists()


def test_json_file_store_keeps_old_values_when_write_fails(tmp_path, monkeypatch):
    path = tmp_path / 'state.json'
    store = JsonFileStore(path)
    store.put('a', b'1')

    def failing_dump(*args, **kwargs):
        raise OSError('disk full')

    monkeypatch.setattr('registry.kv_store.json.dump', failing_dump)

    with pytest.raises(OSError):
        with store.transaction():
            store.put('a', b'2')
            store.put('b', b'3')
            store.delete('a')
    with pytest.raises(OSError):
        store.put('c', b'4')

    assert store.get('a') == b'1'
    assert store.get('b') is None
    assert store.get('c') is None
    assert store.storage_usage() == 2
    # The temporary file is cleaned up and the old file is untouched
    assert [p.name for p in tmp_path.iterdir()] == ['state.json']
    assert json.loads(path.read_text(encoding='utf-8')) == {'a': '1'}
