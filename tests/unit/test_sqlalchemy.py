"""Unit tests for the optional SQLAlchemy engine factory."""

from unittest.mock import patch

from snowdash.sqlalchemy import create_engine_from_settings


class TestCreateEngineFromSettings:
    """Engine URL and connect args follow the credential variant."""

    @patch("snowdash.sqlalchemy.create_engine")
    def test_interactive_engine(self, mock_create_engine, settings):
        create_engine_from_settings(settings)

        args, kwargs = mock_create_engine.call_args
        assert args[0] == "snowflake://test-user%40example.com@test-account/SNOWFLAKE_SAMPLE_DATA/TPCH_SF1"
        assert kwargs["connect_args"] == {"authenticator": "externalbrowser", "warehouse": "TEST_WH"}
        assert kwargs["pool_size"] == 5
        assert kwargs["max_overflow"] == 10

    @patch("snowdash.sqlalchemy.create_engine")
    def test_delegated_engine(self, mock_create_engine, settings, write_token):
        write_token("T1")

        create_engine_from_settings(settings, pool_size=2, max_overflow=0, pool_pre_ping=True)

        args, kwargs = mock_create_engine.call_args
        assert args[0] == "snowflake://abc12345/SNOWFLAKE_SAMPLE_DATA/TPCH_SF1"
        assert kwargs["connect_args"]["authenticator"] == "oauth"
        assert kwargs["connect_args"]["token"] == "T1"
        assert kwargs["connect_args"]["host"] == "abc12345.us-east-1.snowflakecomputing.com"
        assert kwargs["pool_size"] == 2
        assert kwargs["pool_pre_ping"] is True
