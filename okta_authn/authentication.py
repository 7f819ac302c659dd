"""
Okta Authn SDK Authentication Resource

One method per transition of the authentication and recovery transaction
state machine (``/api/v1/authn``). The state machine itself lives on the
server; each method shapes a single request and returns the resulting
``Transaction``.
"""

from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

from .transport import Transport, compact
from .types import FactorType, RecoveryFactorType, Transaction


def _factor_path(fid: str, *segments: str) -> str:
    return "/".join(("authn/factors", quote(fid, safe=""), *segments))


class Authentication:
    """
    Authentication API, accessed via ``client.auth``.

    http://developer.okta.com/docs/api/resources/authn.html
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def _send(self, path: str, payload: Mapping[str, Any]) -> Transaction:
        request = self._transport.post(path)
        request.data(payload)
        return Transaction.from_dict(request.send())

    # =========================================================================
    # Primary Authentication
    # =========================================================================

    def authn(
        self,
        username: str,
        password: str,
        relay_state: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> Transaction:
        """
        Start an authentication transaction with the user's primary password.

        Password, MFA and sign-on policies are evaluated here to decide
        whether the password has expired, a factor must be enrolled or
        additional verification is required.

        Args:
            username: Short name or fully-qualified login
            password: Password credential
            relay_state: Opaque value persisted for the lifetime of the transaction
            options: Opt-in features for the transaction
            context: Additional context properties for the transaction

        Returns:
            Transaction with the resulting status
        """
        self._transport.log(f"Primary authentication for: {username}")

        request = self._transport.post("authn")
        request.data({"username": username, "password": password})
        request.data(compact({
            "relayState": relay_state,
            "options": options,
            "context": context,
        }))
        return Transaction.from_dict(request.send())

    def change_password(self, state_token: str, old_password: str, new_password: str) -> Transaction:
        """
        Change an expired or expiring password.

        Completes a PASSWORD_EXPIRED transaction. A PASSWORD_WARN transaction
        may instead be skipped with ``skip_state``.
        """
        return self._send("authn/credentials/change_password", {
            "stateToken": state_token,
            "oldPassword": old_password,
            "newPassword": new_password,
        })

    # =========================================================================
    # Multi-factor Enrollment and Verification
    # =========================================================================

    def enroll_factor(
        self,
        state_token: str,
        factor_type: FactorType,
        provider: str,
        profile: Dict[str, Any],
    ) -> Transaction:
        """
        Enroll a factor required by the user's MFA policy.

        Args:
            state_token: State token for the current transaction
            factor_type: Type of factor (sms, token:software:totp, question, ...)
            provider: Factor provider (OKTA, GOOGLE, ...)
            profile: Profile attributes of the factor (phoneNumber, question, ...)
        """
        return self._send("authn/factors", {
            "stateToken": state_token,
            "factorType": factor_type,
            "provider": provider,
            "profile": profile,
        })

    def activate_factor(self, state_token: str, fid: str, pass_code: str) -> Transaction:
        """Activate an enrolled factor by verifying its OTP."""
        return self._send(_factor_path(fid, "lifecycle", "activate"), {
            "stateToken": state_token,
            "passCode": pass_code,
        })

    def verify_factor(self, state_token: str, fid: str, verification: Mapping[str, Any]) -> Transaction:
        """
        Verify an enrolled factor for an MFA_REQUIRED or MFA_CHALLENGE transaction.

        Args:
            state_token: State token for the current transaction
            fid: Factor ID returned from enrollment
            verification: Verification properties (answer, passCode, ...)
        """
        request = self._transport.post(_factor_path(fid, "verify"))
        request.data({"stateToken": state_token})
        request.data(verification)
        return Transaction.from_dict(request.send())

    def verify_security_question_factor(self, state_token: str, fid: str, answer: str) -> Transaction:
        """Verify the answer to a question factor."""
        return self.verify_factor(state_token, fid, {"answer": answer})

    def verify_sms_factor(self, state_token: str, fid: str, pass_code: str) -> Transaction:
        """Verify the pass code sent by an SMS factor."""
        return self.verify_factor(state_token, fid, {"passCode": pass_code})

    def verify_totp_factor(self, state_token: str, fid: str, pass_code: str) -> Transaction:
        """Verify the OTP of a token:software:totp factor."""
        return self.verify_factor(state_token, fid, {"passCode": pass_code})

    def send_sms_challenge(self, state_token: str, fid: str) -> Transaction:
        """Send an SMS challenge to the user's device."""
        return self.verify_factor(state_token, fid, {})

    def resend_sms_challenge(self, state_token: str, fid: str) -> Transaction:
        """Resend an SMS challenge to the user's device."""
        return self._send(_factor_path(fid, "verify", "resend"), {"stateToken": state_token})

    # =========================================================================
    # Recovery
    # =========================================================================

    def forgot_password(
        self,
        username: str,
        factor_type: Optional[RecoveryFactorType] = None,
        relay_state: Optional[str] = None,
    ) -> Transaction:
        """
        Start a password recovery transaction.

        Args:
            username: Short name or fully-qualified login
            factor_type: Recovery factor for primary authentication (EMAIL or SMS)
            relay_state: Opaque value persisted for the lifetime of the transaction
        """
        request = self._transport.post("authn/recovery/password")
        request.data({"username": username})
        request.data(compact({"factorType": factor_type, "relayState": relay_state}))
        return Transaction.from_dict(request.send())

    def unlock_account(
        self,
        username: str,
        factor_type: Optional[RecoveryFactorType] = None,
        relay_state: Optional[str] = None,
    ) -> Transaction:
        """Start an unlock recovery transaction for a locked-out user."""
        request = self._transport.post("authn/recovery/unlock")
        request.data({"username": username})
        request.data(compact({"factorType": factor_type, "relayState": relay_state}))
        return Transaction.from_dict(request.send())

    def verify_sms_recovery_factor(self, state_token: str, pass_code: str) -> Transaction:
        """Verify the SMS OTP of a RECOVERY_CHALLENGE transaction."""
        return self._send("authn/recovery/factors/sms/verify", {
            "stateToken": state_token,
            "passCode": pass_code,
        })

    def verify_recovery_token(self, recovery_token: str) -> Transaction:
        """Validate a recovery token distributed out of band (e.g. by email)."""
        return self._send("authn/recovery/token", {"recoveryToken": recovery_token})

    def answer_recovery_question(self, state_token: str, answer: str) -> Transaction:
        """Answer the user's recovery question for a RECOVERY transaction."""
        return self._send("authn/recovery/answer", {
            "stateToken": state_token,
            "answer": answer,
        })

    def reset_password(self, state_token: str, new_password: str) -> Transaction:
        """Reset the password to complete a PASSWORD_RESET transaction."""
        return self._send("authn/credentials/reset_password", {
            "stateToken": state_token,
            "newPassword": new_password,
        })

    # =========================================================================
    # State Management
    # =========================================================================

    def get_state(self, state_token: str) -> Transaction:
        """Get the current state of a transaction."""
        return self._send("authn", {"stateToken": state_token})

    def previous_state(self, state_token: str) -> Transaction:
        """Move the transaction back to its previous state."""
        return self._send("authn/previous", {"stateToken": state_token})

    def skip_state(self, state_token: str) -> Transaction:
        """
        Skip the current state.

        Only available for MFA_ENROLL or PASSWORD_WARN when published as a link.
        """
        return self._send("authn/skip", {"stateToken": state_token})

    def cancel(self, state_token: str) -> Transaction:
        """
        Cancel the transaction and revoke its state token.

        Returns:
            Empty transaction, or one carrying the persisted relay state
        """
        return self._send("authn/cancel", {"stateToken": state_token})
