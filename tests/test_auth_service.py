"""Tests for sign-in, sign-out and admin elevation."""

import asyncio
import logging

import pytest

from burnfit.domain.auth import AuthMethod
from burnfit.domain.coach import ChatRole
from burnfit.domain.errors import InvalidInputError
from burnfit.domain.ledger import EntryKind
from burnfit.services.auth import AuthService
from burnfit.services.coach import WELCOME_MESSAGE, CoachSession
from burnfit.services.ledger import LedgerService
from burnfit.services.profiles import ProfileService
from tests.conftest import FakeClock, FakeCoachClient, InMemoryStateStore, make_profile


def _service(
    store: InMemoryStateStore, client: FakeCoachClient | None = None
) -> AuthService:
    profiles = ProfileService(store)
    ledger = LedgerService(store, clock=FakeClock())
    coach = CoachSession(
        client=client or FakeCoachClient(),
        profiles=profiles,
        ledger=ledger,
        model="gpt-5.2",
        quick_model="gpt-5-mini",
        reasoning_effort="low",
        store=False,
    )
    return AuthService(
        store=store,
        profiles=profiles,
        ledger=ledger,
        coach=coach,
        admin_token="admin-token",
    )


def test_sign_in_records_method() -> None:
    store = InMemoryStateStore()
    service = _service(store)

    method = service.sign_in("guest")

    assert method == AuthMethod.GUEST
    assert store.auth == AuthMethod.GUEST
    assert service.current_method() == AuthMethod.GUEST


def test_sign_in_rejects_unknown_method() -> None:
    store = InMemoryStateStore()

    with pytest.raises(InvalidInputError):
        _service(store).sign_in("facebook")

    assert store.auth is None


def test_sign_out_clears_store_and_services() -> None:
    store = InMemoryStateStore(profile=make_profile(), auth=AuthMethod.GOOGLE)
    service = _service(store)
    service.ledger.add_entry(EntryKind.INTAKE, 300, "Toast")
    service.elevate("admin-token")
    asyncio.run(service.coach.send("my private question"))

    service.sign_out()

    assert store.clears == 1
    assert store.profile is None
    assert store.ledger == []
    assert service.current_method() is None
    assert service.is_admin() is False
    assert service.profiles.get() is None
    assert service.ledger.entries() == []
    history = service.coach.history()
    assert [(turn.role, turn.text) for turn in history] == [
        (ChatRole.ASSISTANT, WELCOME_MESSAGE)
    ]


def test_reply_arriving_after_sign_out_is_dropped() -> None:
    store = InMemoryStateStore(profile=make_profile())
    service = _service(store)

    class SigningOutClient(FakeCoachClient):
        async def reply(self, **kwargs: object) -> str:
            service.sign_out()
            return "answer for the previous user"

    service.coach.client = SigningOutClient()

    reply = asyncio.run(service.coach.send("Hello"))

    assert reply.text == "answer for the previous user"
    assert [turn.text for turn in service.coach.history()] == [WELCOME_MESSAGE]


def test_elevate_with_matching_token() -> None:
    store = InMemoryStateStore()
    service = _service(store)

    assert service.elevate("admin-token") is True
    assert store.is_admin is True
    assert service.is_admin() is True


@pytest.mark.parametrize("token", ["", "wrong", "admin-token "])
def test_elevate_rejects_other_tokens(
    token: str, caplog: pytest.LogCaptureFixture
) -> None:
    store = InMemoryStateStore()

    with caplog.at_level(logging.WARNING, logger="burnfit"):
        assert _service(store).elevate(token) is False

    assert store.is_admin is False
    assert "Rejected admin elevation" in caplog.text
