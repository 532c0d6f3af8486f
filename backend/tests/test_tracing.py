"""
Tests for the shared Langfuse client and LangChain run config.
"""

import unittest
from unittest.mock import patch, MagicMock
from sports_reels.observability import tracing


class TestLangfuseClient(unittest.TestCase):
    """Test Langfuse client caching functionality."""

    def setUp(self):
        """Clear the cached client before each test."""
        tracing._client = None

    def tearDown(self):
        tracing._client = None

    @patch("sports_reels.core.config.LANGFUSE_ENABLED", False)
    def test_disabled_returns_none(self):
        with patch("sports_reels.observability.tracing.Langfuse") as mock_langfuse:
            self.assertIsNone(tracing.get_langfuse_client())
            mock_langfuse.assert_not_called()

    @patch("sports_reels.core.config.LANGFUSE_ENABLED", True)
    @patch("sports_reels.core.config.LANGFUSE_PUBLIC_KEY", "")
    @patch("sports_reels.core.config.LANGFUSE_SECRET_KEY", "sk")
    def test_missing_keys_returns_none(self):
        with patch("sports_reels.observability.tracing.Langfuse") as mock_langfuse:
            self.assertIsNone(tracing.get_langfuse_client())
            mock_langfuse.assert_not_called()

    @patch("sports_reels.core.config.LANGFUSE_ENABLED", True)
    @patch("sports_reels.core.config.LANGFUSE_PUBLIC_KEY", "pk")
    @patch("sports_reels.core.config.LANGFUSE_SECRET_KEY", "sk")
    @patch("sports_reels.core.config.LANGFUSE_BASE_URL", "http://test.langfuse.com")
    def test_client_is_created_once(self):
        """Repeated calls return the same cached client."""
        with patch("sports_reels.observability.tracing.Langfuse") as mock_langfuse:
            mock_client = MagicMock()
            mock_langfuse.return_value = mock_client

            client1 = tracing.get_langfuse_client()
            client2 = tracing.get_langfuse_client()

            self.assertIs(client1, mock_client)
            self.assertIs(client1, client2)
            mock_langfuse.assert_called_once_with(
                public_key="pk",
                secret_key="sk",
                host="http://test.langfuse.com",
            )

    @patch("sports_reels.core.config.LANGFUSE_ENABLED", True)
    @patch("sports_reels.core.config.LANGFUSE_PUBLIC_KEY", "pk")
    @patch("sports_reels.core.config.LANGFUSE_SECRET_KEY", "sk")
    def test_cleanup_flushes_and_resets(self):
        with patch("sports_reels.observability.tracing.Langfuse") as mock_langfuse:
            mock_client = MagicMock()
            mock_langfuse.return_value = mock_client
            tracing.get_langfuse_client()

            tracing.cleanup_client()

            mock_client.flush.assert_called_once()
            mock_client.shutdown.assert_called_once()
            self.assertIsNone(tracing._client)

    def test_cleanup_without_client_is_noop(self):
        tracing.cleanup_client()
        self.assertIsNone(tracing._client)


class TestRunConfig(unittest.TestCase):
    """Test the invoke config passed to LangChain models."""

    @patch("sports_reels.observability.tracing.get_callback_handler", return_value=None)
    def test_no_callbacks_when_tracing_disabled(self, _):
        run_config = tracing.build_run_config("video_analysis")
        self.assertEqual(run_config["run_name"], "video_analysis")
        self.assertEqual(run_config["callbacks"], [])
        self.assertEqual(run_config["metadata"], {})

    @patch("sports_reels.observability.tracing.get_callback_handler")
    def test_metadata_is_stringified_and_none_dropped(self, mock_handler):
        handler = MagicMock()
        mock_handler.return_value = handler

        run_config = tracing.build_run_config(
            "consular_summary",
            user_id=7,
            metadata={"player_id": 12, "visa_type": "uk_gbe", "order_id": None},
        )

        self.assertEqual(run_config["callbacks"], [handler])
        self.assertEqual(run_config["metadata"], {
            "langfuse_user_id": "7",
            "player_id": "12",
            "visa_type": "uk_gbe",
        })


if __name__ == "__main__":
    unittest.main()
