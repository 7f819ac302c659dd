"""
Tests for the Authentication resource

Checks the path and exact JSON payload of every authn operation against
mocked HTTP responses.
"""

import json
import string
import pytest
from typing import Any, Callable, Dict, Optional

import httpx
import respx
from hypothesis import given, settings, strategies as st

from okta_authn import Authentication, OktaClient, OktaConfig, Transaction


BASE = "https://example.okta.com/api/v1"

MFA_REQUIRED = {
    "stateToken": "007ucIX7PATyn94hsHfOLVaXAmOBkKHWnOOLG43bsb",
    "expiresAt": "2026-10-19T17:21:05.000Z",
    "status": "MFA_REQUIRED",
    "relayState": "/myapp/some/deep/link/i/want/to/return/to",
    "_embedded": {
        "user": {"id": "00ub0oNGTSWTBKOLGLNR", "profile": {"login": "alice@example.com"}},
        "factors": [{"id": "sms193zUBEROPBNZKPPE", "factorType": "sms", "provider": "OKTA"}],
    },
    "_links": {
        "cancel": {"href": "https://example.okta.com/api/v1/authn/cancel"},
    },
}


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def client() -> OktaClient:
    return OktaClient(OktaConfig(org_url="https://example.okta.com"))


@pytest.fixture
def auth(client: OktaClient) -> Authentication:
    return client.auth


def sent_json(route: respx.Route) -> Dict[str, Any]:
    """Decode the JSON body of the last call to a route."""
    return json.loads(route.calls.last.request.content)


def mock_post(path: str, body: Optional[Dict[str, Any]] = None) -> respx.Route:
    return respx.post(f"{BASE}/{path}").mock(
        return_value=httpx.Response(200, json=body if body is not None else MFA_REQUIRED)
    )


# =============================================================================
# Wire Mapping
# =============================================================================

WIRE_CASES = [
    (
        lambda a: a.authn("alice", "secret"),
        "authn",
        {"username": "alice", "password": "secret"},
    ),
    (
        lambda a: a.change_password("st", "old", "new"),
        "authn/credentials/change_password",
        {"stateToken": "st", "oldPassword": "old", "newPassword": "new"},
    ),
    (
        lambda a: a.enroll_factor("st", "sms", "OKTA", {"phoneNumber": "+1-555-415-1337"}),
        "authn/factors",
        {
            "stateToken": "st",
            "factorType": "sms",
            "provider": "OKTA",
            "profile": {"phoneNumber": "+1-555-415-1337"},
        },
    ),
    (
        lambda a: a.activate_factor("st", "mbl1", "123456"),
        "authn/factors/mbl1/lifecycle/activate",
        {"stateToken": "st", "passCode": "123456"},
    ),
    (
        lambda a: a.verify_factor("st", "ufs1", {"answer": "mayonnaise"}),
        "authn/factors/ufs1/verify",
        {"stateToken": "st", "answer": "mayonnaise"},
    ),
    (
        lambda a: a.resend_sms_challenge("st", "sms1"),
        "authn/factors/sms1/verify/resend",
        {"stateToken": "st"},
    ),
    (
        lambda a: a.forgot_password("alice"),
        "authn/recovery/password",
        {"username": "alice"},
    ),
    (
        lambda a: a.unlock_account("alice"),
        "authn/recovery/unlock",
        {"username": "alice"},
    ),
    (
        lambda a: a.verify_sms_recovery_factor("st", "657866"),
        "authn/recovery/factors/sms/verify",
        {"stateToken": "st", "passCode": "657866"},
    ),
    (
        lambda a: a.verify_recovery_token("VBQ0gwBLFHf"),
        "authn/recovery/token",
        {"recoveryToken": "VBQ0gwBLFHf"},
    ),
    (
        lambda a: a.answer_recovery_question("st", "Cowboys"),
        "authn/recovery/answer",
        {"stateToken": "st", "answer": "Cowboys"},
    ),
    (
        lambda a: a.reset_password("st", "Ch-ch-ch-ch-Changes!"),
        "authn/credentials/reset_password",
        {"stateToken": "st", "newPassword": "Ch-ch-ch-ch-Changes!"},
    ),
    (lambda a: a.get_state("st"), "authn", {"stateToken": "st"}),
    (lambda a: a.previous_state("st"), "authn/previous", {"stateToken": "st"}),
    (lambda a: a.skip_state("st"), "authn/skip", {"stateToken": "st"}),
    (lambda a: a.cancel("st"), "authn/cancel", {"stateToken": "st"}),
]


class TestWireMapping:
    """Every operation posts exactly its required keys to its path."""

    @pytest.mark.parametrize("call,path,expected", WIRE_CASES)
    @respx.mock
    def test_required_only(
        self,
        auth: Authentication,
        call: Callable[[Authentication], Transaction],
        path: str,
        expected: Dict[str, Any],
    ):
        route = mock_post(path)

        result = call(auth)

        assert route.called
        assert route.calls.last.request.method == "POST"
        assert sent_json(route) == expected
        assert isinstance(result, Transaction)

    @respx.mock
    def test_factor_id_is_path_encoded(self, auth: Authentication):
        """Test factor ID goes into the path, never the payload."""
        route = respx.route(method="POST", host="example.okta.com").mock(
            return_value=httpx.Response(200, json=MFA_REQUIRED)
        )

        auth.verify_factor("st", "a/b", {"passCode": "1"})

        assert route.calls.last.request.url.raw_path == b"/api/v1/authn/factors/a%2Fb/verify"
        assert sent_json(route) == {"stateToken": "st", "passCode": "1"}

    @respx.mock
    def test_verification_fields_follow_state_token(self, auth: Authentication):
        route = mock_post("authn/factors/ufs1/verify")

        auth.verify_factor("st", "ufs1", {"passCode": "1", "rememberDevice": True})

        assert list(sent_json(route)) == ["stateToken", "passCode", "rememberDevice"]


# =============================================================================
# Optional Fields
# =============================================================================

class TestOptionalFields:
    """Optional parameters are sent when given and omitted otherwise."""

    @respx.mock
    def test_authn_with_all_options(self, auth: Authentication):
        route = mock_post("authn")

        auth.authn(
            "alice",
            "secret",
            relay_state="/deep/link",
            options={"multiOptionalFactorEnroll": False, "warnBeforePasswordExpired": True},
            context={"deviceToken": "26q43Ak9Eh04p7H6Nnx0m69JqYOrfVBY"},
        )

        assert sent_json(route) == {
            "username": "alice",
            "password": "secret",
            "relayState": "/deep/link",
            "options": {"multiOptionalFactorEnroll": False, "warnBeforePasswordExpired": True},
            "context": {"deviceToken": "26q43Ak9Eh04p7H6Nnx0m69JqYOrfVBY"},
        }

    @respx.mock
    def test_authn_empty_options_are_sent(self, auth: Authentication):
        """Test empty but present values are not mistaken for absent ones."""
        route = mock_post("authn")

        auth.authn("alice", "secret", relay_state="", options={})

        assert sent_json(route) == {
            "username": "alice",
            "password": "secret",
            "relayState": "",
            "options": {},
        }

    @pytest.mark.parametrize("method,path", [
        ("forgot_password", "authn/recovery/password"),
        ("unlock_account", "authn/recovery/unlock"),
    ])
    @respx.mock
    def test_recovery_options(self, auth: Authentication, method: str, path: str):
        route = mock_post(path)

        getattr(auth, method)("alice", factor_type="SMS", relay_state="/home")
        assert sent_json(route) == {"username": "alice", "factorType": "SMS", "relayState": "/home"}

        getattr(auth, method)("alice", relay_state="/home")
        assert sent_json(route) == {"username": "alice", "relayState": "/home"}

    @settings(max_examples=25, deadline=None)
    @given(
        relay_state=st.one_of(st.none(), st.text(alphabet=string.ascii_letters + "/", max_size=20)),
        factor_type=st.one_of(st.none(), st.sampled_from(["EMAIL", "SMS", "CALL"])),
    )
    def test_forgot_password_omits_absent_fields(
        self, relay_state: Optional[str], factor_type: Optional[str]
    ):
        with respx.mock:
            route = mock_post("authn/recovery/password")
            client = OktaClient(OktaConfig(org_url="https://example.okta.com"))

            client.auth.forgot_password("alice", factor_type=factor_type, relay_state=relay_state)

            payload = sent_json(route)
            assert payload["username"] == "alice"
            assert ("relayState" in payload) == (relay_state is not None)
            assert ("factorType" in payload) == (factor_type is not None)
            assert None not in payload.values()
            client.close()


# =============================================================================
# Convenience Verification
# =============================================================================

class TestConvenienceVerification:
    """Shortcut verifiers send what verify_factor would and return its result."""

    @pytest.mark.parametrize("method,args,verification", [
        ("verify_security_question_factor", ("mayonnaise",), {"answer": "mayonnaise"}),
        ("verify_sms_factor", ("123456",), {"passCode": "123456"}),
        ("verify_totp_factor", ("654321",), {"passCode": "654321"}),
        ("send_sms_challenge", (), {}),
    ])
    @respx.mock
    def test_matches_verify_factor(
        self, auth: Authentication, method: str, args: tuple, verification: Dict[str, Any]
    ):
        route = mock_post("authn/factors/fid1/verify", {"status": "SUCCESS", "sessionToken": "s1"})

        shortcut = getattr(auth, method)("st", "fid1", *args)
        shortcut_payload = sent_json(route)

        direct = auth.verify_factor("st", "fid1", verification)
        direct_payload = sent_json(route)

        assert shortcut_payload == direct_payload
        assert shortcut is not None
        assert shortcut.to_dict() == direct.to_dict()
        assert shortcut.session_token == "s1"

    @respx.mock
    def test_resend_uses_distinct_path(self, auth: Authentication):
        verify = mock_post("authn/factors/sms1/verify")
        resend = mock_post("authn/factors/sms1/verify/resend")

        auth.send_sms_challenge("st", "sms1")
        auth.resend_sms_challenge("st", "sms1")

        assert verify.call_count == 1
        assert resend.call_count == 1
        assert sent_json(verify) == sent_json(resend) == {"stateToken": "st"}


# =============================================================================
# Transactions
# =============================================================================

class TestTransactions:
    """Responses come back as transactions with the body intact."""

    @respx.mock
    def test_authn_end_to_end(self, auth: Authentication):
        route = mock_post("authn")

        result = auth.authn("alice", "secret")

        assert route.calls.last.request.url == f"{BASE}/authn"
        assert sent_json(route) == {"username": "alice", "password": "secret"}
        assert result.to_dict() == MFA_REQUIRED
        assert result.status == "MFA_REQUIRED"
        assert result.state_token == MFA_REQUIRED["stateToken"]
        assert result.relay_state == MFA_REQUIRED["relayState"]
        assert result.embedded["factors"][0]["id"] == "sms193zUBEROPBNZKPPE"
        assert result.link("cancel") == "https://example.okta.com/api/v1/authn/cancel"
        assert result.link("next") is None
        assert not result.is_success

    def test_unknown_fields_kept_in_extra(self):
        transaction = Transaction.from_dict({"status": "SUCCESS", "futureField": 1})

        assert transaction.is_success
        assert transaction.extra == {"futureField": 1}

    @respx.mock
    def test_cancel_returns_relay_state(self, auth: Authentication):
        mock_post("authn/cancel", {"relayState": "/myapp"})

        result = auth.cancel("st")

        assert result.relay_state == "/myapp"
        assert result.status is None
