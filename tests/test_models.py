"""Unit tests for model classes."""

from devconnect.models.connection_request import ConnectionRequest, ConnectionStatus, pair_key
from devconnect.models.user import SAFE_PROFILE_FIELDS, Gender, User, safe_profile


def make_user(**overrides):
    data = {
        "id": "u1",
        "first_name": "John",
        "last_name": "Doe",
        "email": "john@example.com",
        "password_hash": "hashed",
        "age": 30,
        "gender": Gender.MALE,
        "skills": ["python"],
    }
    data.update(overrides)
    return User(**data)


def test_user_creation():
    """Test User model creation and dict conversion."""
    user = make_user()
    assert user.first_name == "John"
    assert user.gender is Gender.MALE

    user_dict = user.to_dict()
    assert user_dict["_id"] == "u1"
    assert user_dict["gender"] == "male"
    assert User.from_dict(user_dict) == user


def test_user_repr_hides_credential():
    assert "hashed" not in repr(make_user())


def test_safe_profile_excludes_credential_and_email():
    profile = make_user().safe_profile()
    assert profile["id"] == "u1"
    assert set(profile) == {"id", *SAFE_PROFILE_FIELDS}
    assert "email" not in profile
    assert "password_hash" not in profile


def test_own_profile_has_email_but_no_credential():
    profile = make_user().own_profile()
    assert profile["email"] == "john@example.com"
    assert "password_hash" not in profile


def test_safe_profile_from_projected_document():
    profile = safe_profile({"_id": "x", "first_name": "Ann"})
    assert profile["first_name"] == "Ann"
    assert profile["skills"] == []
    assert profile["age"] is None


def test_from_dict_defaults_missing_gender_to_other():
    user = User.from_dict({
        "_id": "u2",
        "first_name": "A",
        "last_name": "B",
        "email": "a@example.com",
        "password_hash": "h",
    })
    assert user.gender is Gender.OTHER
    assert user.skills == []


def test_pair_key_ignores_orientation():
    assert pair_key("a", "b") == pair_key("b", "a")
    assert pair_key("a", "b") != pair_key("a", "c")


def test_connection_request_other_party():
    """Test ConnectionRequest endpoint resolution."""
    request = ConnectionRequest("r1", "alice", "bob", ConnectionStatus.ACCEPTED)

    assert request.other_party("alice") == "bob"
    assert request.other_party("bob") == "alice"

    data = request.to_dict()
    assert data["status"] == "accepted"
    assert data["pair_key"] == pair_key("alice", "bob")
    assert ConnectionRequest.from_dict(data) == request
