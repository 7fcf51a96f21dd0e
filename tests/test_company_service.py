import json

import httpx

from company_console.models.company import Company, CompanyDraft
from company_console.rbac import MemberAction, Role
from company_console.services.company_service_impl import CompanyServiceImpl


class Recorder:
    """MockTransport handler returning canned responses and recording requests."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_body(self) -> dict:
        return json.loads(self.last.content)


def service_with(response: httpx.Response) -> tuple[CompanyServiceImpl, Recorder]:
    recorder = Recorder(response)
    service = CompanyServiceImpl("http://api.test/api", transport=httpx.MockTransport(recorder))
    return service, recorder


async def test_list_companies_unwraps_wrapped_payload():
    payload = {"companies": [{"id": 7, "name": "Acme", "address": "1 Rd", "phone": "555", "logoUrl": "x.png"}]}
    service, recorder = service_with(httpx.Response(200, json=payload))

    companies = await service.list_companies("tok")

    assert recorder.last.url.path == "/api/companies"
    assert companies == [
        Company(id="7", name="Acme", address="1 Rd", phone="555", logo_url="x.png")
    ]


async def test_list_user_companies_path():
    service, recorder = service_with(httpx.Response(200, json=[]))
    assert await service.list_user_companies("tok") == []
    assert recorder.last.url.path == "/api/companies/user"


async def test_create_company_sends_camel_case_without_unset_fields():
    service, recorder = service_with(
        httpx.Response(201, json={"id": "c1", "name": "Acme", "address": "1 Rd", "phone": "555"})
    )

    company = await service.create_company(CompanyDraft("Acme", "1 Rd", "555"), "tok")

    assert recorder.last.method == "POST"
    assert recorder.last_body == {"name": "Acme", "address": "1 Rd", "phone": "555", "status": "ACTIVE"}
    assert company.id == "c1"


async def test_update_company_keeps_submitted_company_on_empty_response():
    service, recorder = service_with(httpx.Response(204))
    company = Company(id="3", name="Renamed", address="a", phone="p")

    assert await service.update_company(company, "tok") == company
    assert recorder.last.method == "PUT"
    assert recorder.last.url.path == "/api/companies/3"


async def test_authenticate_company():
    service, recorder = service_with(
        httpx.Response(
            200,
            json={"token": "jwt", "user": {"id": "u1", "email": "a@b.co"}, "company": {"id": "2", "name": "Two"}},
        )
    )

    grant = await service.authenticate_company("2", "a@b.co", "secret")

    assert recorder.last_body == {"companyId": "2", "email": "a@b.co", "password": "secret"}
    assert "Authorization" not in recorder.last.headers
    assert grant.access_token == "jwt"
    assert grant.user.id == "u1"
    assert grant.company.name == "Two"


async def test_manage_member_body():
    service, recorder = service_with(httpx.Response(200, json={}))

    await service.manage_member("1", "u2", MemberAction.UPDATE_ROLE, Role.ADMIN, "tok")

    assert recorder.last.url.path == "/api/companies/1/members"
    assert recorder.last_body == {"companyId": "1", "userId": "u2", "action": "UPDATE_ROLE", "role": "ADMIN"}


async def test_remove_member_omits_role():
    service, recorder = service_with(httpx.Response(200, json={}))
    await service.manage_member("1", "u2", "REMOVE", token="tok")
    assert "role" not in recorder.last_body


async def test_invite_member():
    service, recorder = service_with(
        httpx.Response(200, json={"invitationId": "inv1", "expiresAt": "2030-01-01", "invitationToken": "t1"})
    )

    receipt = await service.invite_member("1", "new@b.co", Role.ADMIN, "Welcome", "tok")

    assert recorder.last.url.path == "/api/companies/1/invite"
    assert recorder.last_body == {"companyId": "1", "email": "new@b.co", "role": "ADMIN", "message": "Welcome"}
    assert receipt.invitation_id == "inv1"


async def test_accept_invitation_returns_company_id():
    service, recorder = service_with(httpx.Response(200, json={"companyId": "9"}))
    assert await service.accept_invitation("t1", "tok") == "9"
    assert recorder.last_body == {"token": "t1"}


async def test_transfer_ownership_body():
    service, recorder = service_with(httpx.Response(200, json={}))
    await service.transfer_ownership("1", "u3", "tok")
    assert recorder.last.url.path == "/api/companies/1/transfer-ownership"
    assert recorder.last_body == {"newOwnerId": "u3"}


async def test_invitation_paths():
    service, recorder = service_with(httpx.Response(200, json={"invitations": [{"id": "i1", "email": "x@y.z"}]}))

    invitations = await service.list_invitations("1", "tok")
    await service.resend_invitation("1", "i1", "tok")
    await service.cancel_invitation("1", "i1", "tok")

    assert invitations[0].is_pending
    assert [request.url.path for request in recorder.requests] == [
        "/api/companies/1/invitations",
        "/api/companies/1/invitations/i1/resend",
        "/api/companies/1/invitations/i1/cancel",
    ]
