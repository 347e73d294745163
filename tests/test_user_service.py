import jwt
import pytest

from stayhub.domain.errors import Forbidden, SubscriptionExpired, SubscriptionRequired, Unauthenticated, ValidationError
from stayhub.infrastructure.repositories.user_repository import UserRepository
from stayhub.services.access_service import AccessGate
from stayhub.services.user_service import UserService

SECRET = "unit-test-secret-long-enough-for-hs256"


@pytest.fixture
def user_service(store):
    return UserService(UserRepository(store), jwt_secret=SECRET)


@pytest.fixture
def gate(user_service, subscription_service):
    return AccessGate(user_service, subscription_service)


def test_register_hashes_password_and_issues_token(user_service):
    user, token = user_service.register("Guest@Example.com", "pw-123", "Guest")

    assert user.email == "guest@example.com"
    assert user.password_hash != "pw-123"
    identity = user_service.resolve_identity(token)
    assert identity.user_id == user.id
    assert identity.email == "guest@example.com"


def test_register_rejects_duplicates_case_insensitively(user_service):
    user_service.register("guest@example.com", "pw", "Guest")
    with pytest.raises(ValidationError):
        user_service.register("GUEST@example.com", "pw", "Again")


def test_authenticate(user_service):
    user, _ = user_service.register("guest@example.com", "pw-123", "Guest")
    authenticated, _ = user_service.authenticate("guest@example.com", "pw-123")
    assert authenticated.id == user.id

    with pytest.raises(Unauthenticated):
        user_service.authenticate("guest@example.com", "wrong")
    with pytest.raises(Unauthenticated):
        user_service.authenticate("nobody@example.com", "pw-123")


def test_missing_token_is_unauthenticated(user_service):
    with pytest.raises(Unauthenticated):
        user_service.resolve_identity(None)


def test_expired_or_foreign_tokens_are_forbidden(store):
    expired_service = UserService(UserRepository(store), jwt_secret=SECRET, jwt_expiration_hours=-1)
    user, token = expired_service.register("guest@example.com", "pw", "Guest")

    with pytest.raises(Forbidden):
        expired_service.resolve_identity(token)

    foreign = jwt.encode({"userId": user.id}, "another-secret-that-is-long-enough-too", algorithm="HS256")
    with pytest.raises(Forbidden):
        expired_service.resolve_identity(foreign)


def test_token_without_user_claim_is_forbidden(user_service):
    token = jwt.encode({"email": "x@example.com"}, SECRET, algorithm="HS256")
    with pytest.raises(Forbidden):
        user_service.resolve_identity(token)


def test_gate_requires_subscription(gate, user_service, subscription_service, clock):
    user, token = user_service.register("host@example.com", "pw", "Host")
    identity = gate.authenticate(token)

    with pytest.raises(SubscriptionRequired):
        gate.require_subscription(identity)

    subscription_service.subscribe(user.id, "basic")
    admitted = gate.require_subscription(gate.authenticate(token))
    assert admitted.user_id == user.id
    assert admitted.subscription.plan_id == "basic"

    clock.advance(days=45)
    with pytest.raises(SubscriptionExpired):
        gate.require_subscription(identity)


def test_gate_rejects_missing_token(gate):
    with pytest.raises(Unauthenticated):
        gate.authenticate(None)
