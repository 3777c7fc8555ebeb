import pytest

from adapters.transaction import Transaction


class FakeConn:
    def __init__(self):
        self.calls = []

    def commit(self):
        self.calls.append("commit")

    def rollback(self):
        self.calls.append("rollback")


def test_transaction_commits_on_clean_exit():
    conn = FakeConn()
    began = []
    with Transaction(conn, begin=lambda c: began.append(c)) as tx:
        assert tx.active is True
    assert began == [conn]
    assert conn.calls == ["commit"]
    assert tx.active is False


def test_transaction_rolls_back_and_propagates():
    conn = FakeConn()
    with pytest.raises(KeyError):
        with Transaction(conn):
            raise KeyError("boom")
    assert conn.calls == ["rollback"]


def test_transaction_is_not_reentrant():
    tx = Transaction(FakeConn())
    tx.begin()
    with pytest.raises(RuntimeError, match="already started"):
        tx.begin()


def test_commit_and_rollback_are_noops_when_inactive():
    conn = FakeConn()
    tx = Transaction(conn)
    tx.commit()
    tx.rollback()
    assert conn.calls == []
