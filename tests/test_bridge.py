import pytest

from company_console import bridge

HOST = "https://host.example.com"


def auth_message(**overrides):
    data = {
        "type": "company-auth",
        "user": {"id": "u1", "email": "a@b.co"},
        "accessToken": "jwt",
        "selectedCompany": {"id": "2", "name": "Two"},
        "role": "ADMIN",
    }
    data.update(overrides)
    return data


@pytest.mark.parametrize(
    "origin, allow_list, expected",
    [
        (HOST, [HOST], True),
        (HOST + "/", [HOST], True),
        (HOST, [HOST + "/"], True),
        ("https://evil.example.com", [HOST], False),
        (None, [HOST], False),
        ("https://anything.example.com", [], True),
    ],
)
def test_is_trusted_origin(origin, allow_list, expected):
    assert bridge.is_trusted_origin(origin, allow_list) is expected


def test_parse_host_message():
    grant = bridge.parse_host_message(auth_message())

    assert grant.user.id == "u1"
    assert grant.access_token == "jwt"
    assert grant.company.id == "2"
    assert grant.role == "ADMIN"


@pytest.mark.parametrize(
    "data",
    [
        None,
        "company-auth",
        auth_message(type="something-else"),
        auth_message(user=None),
        auth_message(accessToken=""),
    ],
)
def test_ignored_messages(data):
    assert bridge.parse_host_message(data) is None


def test_receive_checks_origin_before_parsing():
    message = {"origin": "https://evil.example.com", "data": auth_message()}
    assert bridge.receive(message, [HOST]) is None
    assert bridge.receive({**message, "origin": HOST}, [HOST]).access_token == "jwt"


def test_receive_empty_message():
    assert bridge.receive(None, [HOST]) is None
    assert bridge.receive({}, []) is None


def test_listener_script_filters_on_message_type():
    assert '"company-auth"' in bridge.HOST_LISTENER_SCRIPT
    assert "removeEventListener" in bridge.HOST_LISTENER_SCRIPT
