from __future__ import annotations

from BackEnd.models.session import Mode
from BackEnd.repos.resume_store import ResumptionStore
from BackEnd.repos.session_store import SessionStore
from reset_stats import reset_all_stats

from conftest import closed, local_ms

T0 = local_ms(2024, 3, 15, 9, 0)


def test_nothing_to_reset(storage, capsys) -> None:
    assert not reset_all_stats(storage, ask=lambda prompt: "yes")
    assert "already at 0" in capsys.readouterr().out


def test_confirmed_reset_clears_everything(storage) -> None:
    SessionStore(storage).append(closed(T0, T0 + 60_000))
    ResumptionStore(storage).save_run(Mode.TIMER, T0, 300)

    assert reset_all_stats(storage, ask=lambda prompt: "Y ")

    assert storage.keys() == []
    assert len(SessionStore(storage)) == 0


def test_declined_reset_keeps_history(storage) -> None:
    SessionStore(storage).append(closed(T0, T0 + 60_000))

    assert not reset_all_stats(storage, ask=lambda prompt: "no")
    assert len(SessionStore(storage)) == 1
