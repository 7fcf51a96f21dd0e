"""
Cross-frame auth bridge.

When the console is embedded in a host application, the host posts a
message of the form::

    {"type": "company-auth", "user": {...}, "accessToken": "...",
     "selectedCompany": {...}, "role": "ADMIN"}

to the console's window. A small browser script (see
components.auth_bridge) forwards the message data and its origin to the
backend, where the helpers below decide whether to trust it.
"""

from typing import Any, Iterable, Mapping

from company_console.lib import logs
from company_console.models.auth import AuthGrant

LOG = logs.logger(__file__)

AUTH_MESSAGE_TYPE = "company-auth"

# Resolves with the first auth message; the backend re-arms it after each one.
HOST_LISTENER_SCRIPT = """
new Promise((resolve) => {
  const onMessage = (event) => {
    const data = event.data;
    if (!data || typeof data !== "object" || data.type !== "%s") {
      return;
    }
    window.removeEventListener("message", onMessage);
    resolve({ origin: event.origin, data: data });
  };
  window.addEventListener("message", onMessage);
})
""" % AUTH_MESSAGE_TYPE


def is_trusted_origin(origin: str | None, allow_list: Iterable[str]) -> bool:
    """
    Check a message origin against the configured allow-list.

    An empty allow-list accepts every origin.
    """
    allowed = [entry.rstrip("/") for entry in allow_list]
    if not allowed:
        LOG.warning("No trusted origins configured, accepting auth from %s", origin)
        return True
    return bool(origin) and origin.rstrip("/") in allowed


def parse_host_message(data: Any) -> AuthGrant | None:
    """
    Extract credentials from a host message.

    Args:
        data: The message event's data.

    Returns:
        An AuthGrant when the message is an auth message carrying both a
        user and an access token, otherwise None.
    """
    if not isinstance(data, Mapping) or data.get("type") != AUTH_MESSAGE_TYPE:
        return None
    if not data.get("user") or not data.get("accessToken"):
        LOG.debug("Ignoring auth message without user or token")
        return None
    return AuthGrant.from_dict(data)


def receive(
    message: Mapping[str, Any] | None, allow_list: Iterable[str]
) -> AuthGrant | None:
    """Validate a forwarded {origin, data} message and return its grant."""
    if not message:
        return None
    origin = message.get("origin")
    if not is_trusted_origin(origin, allow_list):
        LOG.warning("Rejected auth message from untrusted origin %s", origin)
        return None
    return parse_host_message(message.get("data"))
