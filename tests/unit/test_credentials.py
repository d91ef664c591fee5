"""Unit tests for credential variants and mode selection."""

from pydantic import SecretStr

from snowdash.connection import (
    AuthMode,
    DelegatedTokenCredential,
    InteractiveCredential,
    build_credential,
    read_token,
    select_credential,
)


class TestSelectCredential:
    """Tests for token-file driven mode selection."""

    def test_absent_token_selects_interactive(self, settings):
        credential = select_credential(settings)

        assert isinstance(credential, InteractiveCredential)
        assert credential.mode is AuthMode.INTERACTIVE
        assert credential.account == "test-account"
        assert credential.user == "test-user@example.com"

    def test_present_token_selects_delegated(self, settings, write_token):
        write_token("abc123\n")

        credential = select_credential(settings)

        assert isinstance(credential, DelegatedTokenCredential)
        assert credential.mode is AuthMode.DELEGATED_TOKEN
        assert credential.token.get_secret_value() == "abc123"

    def test_read_token_missing_file(self, token_path):
        assert read_token(token_path) is None

    def test_empty_token_file_still_selects_delegated(self, settings, write_token):
        write_token("")

        assert isinstance(select_credential(settings), DelegatedTokenCredential)


class TestInteractiveCredential:
    """Tests for interactive connect arguments."""

    def test_connect_args(self, settings):
        args = build_credential(settings, None).connect_args()

        assert args == {
            "account": "test-account",
            "user": "test-user@example.com",
            "authenticator": "externalbrowser",
            "warehouse": "TEST_WH",
            "database": "SNOWFLAKE_SAMPLE_DATA",
            "schema": "TPCH_SF1",
        }

    def test_role_is_passed_when_set(self):
        credential = InteractiveCredential("a", "u", "W", "D", "S", role="ANALYST")

        assert credential.connect_args()["role"] == "ANALYST"


class TestDelegatedTokenCredential:
    """Tests for OAuth connect arguments."""

    def test_connect_args(self, settings):
        args = build_credential(settings, "abc123").connect_args()

        assert args["authenticator"] == "oauth"
        assert args["token"] == "abc123"
        assert args["host"] == "abc12345.us-east-1.snowflakecomputing.com"
        assert args["account"] == "abc12345"
        assert "user" not in args

    def test_account_fallback_without_host(self):
        credential = DelegatedTokenCredential("", SecretStr("t"), "W", "D", "S")

        assert credential.account == "snowflake"
        assert "host" not in credential.connect_args()

    def test_token_is_not_exposed_in_repr(self):
        credential = DelegatedTokenCredential("h", SecretStr("super-secret"), "W", "D", "S")

        assert "super-secret" not in repr(credential)

    def test_equality_follows_token_content(self):
        first = DelegatedTokenCredential("h", SecretStr("T1"), "W", "D", "S")

        assert first == DelegatedTokenCredential("h", SecretStr("T1"), "W", "D", "S")
        assert first != DelegatedTokenCredential("h", SecretStr("T2"), "W", "D", "S")
