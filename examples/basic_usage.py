"""
Okta Authn Python SDK - Basic Usage Example

Walks an authentication transaction through primary authentication and
SMS verification, then starts a password recovery.
"""

from okta_authn import (
    OktaClient,
    OktaConfig,
    OktaApiError,
    NetworkError,
)


def authn_example(client: OktaClient) -> None:
    """Primary authentication followed by MFA."""
    print("=== Authentication Example ===\n")

    try:
        transaction = client.auth.authn(
            "alice@example.com",
            "SecurePassword123!",
            relay_state="/dashboard",
            options={"warnBeforePasswordExpired": True},
        )
        print(f"Status: {transaction.status}")

        if transaction.status == "MFA_REQUIRED":
            factors = transaction.embedded.get("factors", [])
            sms = next((f for f in factors if f.get("factorType") == "sms"), None)
            if sms:
                transaction = client.auth.send_sms_challenge(transaction.state_token, sms["id"])
                print(f"Challenge sent, status: {transaction.status}")

                code = input("SMS code: ")
                transaction = client.auth.verify_sms_factor(
                    transaction.state_token, sms["id"], code
                )

        if transaction.is_success:
            print(f"Session token: {transaction.session_token}")
    except OktaApiError as e:
        print(f"Auth failed: {e.error_code} {e.error_summary}")
        for cause in e.error_causes():
            print(f"  - {cause.error_summary}")
    except NetworkError as e:
        print(f"Network error: {e.message}")


def recovery_example(client: OktaClient) -> None:
    """Start a password recovery by email."""
    print("\n=== Recovery Example ===\n")

    try:
        transaction = client.auth.forgot_password("alice@example.com", factor_type="EMAIL")
        print(f"Recovery status: {transaction.status}")
    except OktaApiError as e:
        print(f"Recovery failed: {e.error_summary}")


if __name__ == "__main__":
    with OktaClient(OktaConfig.from_env()) as okta:
        authn_example(okta)
        recovery_example(okta)
