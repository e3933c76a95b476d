import unittest
from unittest.mock import patch

from smartstudy.clients.llm_client import StudyGuideClient, build_nvidia_chat_client


class TestStudyGuideClient(unittest.TestCase):
    def _client(self, api_key="nvapi-test"):
        self.calls = []

        def factory(**kwargs):
            self.calls.append(kwargs)
            return object()

        return StudyGuideClient("meta/test", 0.5, 512, api_key=api_key, factory=factory)

    def test_chat_model_is_created_once(self):
        client = self._client()
        first = client.chat_model()
        self.assertIs(client.chat_model(), first)
        self.assertEqual(
            self.calls,
            [{"model_name": "meta/test", "temperature": 0.5, "max_tokens": 512, "api_key": "nvapi-test"}],
        )

    def test_configured_requires_api_key(self):
        self.assertTrue(self._client().configured)
        self.assertFalse(self._client(api_key="").configured)

    def test_closed_client_refuses_use(self):
        client = self._client()
        client.close()
        self.assertTrue(client.closed)
        self.assertFalse(client.configured)
        with self.assertRaises(RuntimeError):
            client.chat_model()

    def test_from_settings_reads_environment(self):
        env = {
            "NVIDIA_API_KEY": "nvapi-env",
            "STUDY_GUIDE_MODEL": "meta/other",
            "STUDY_GUIDE_TEMPERATURE": "0.7",
            "STUDY_GUIDE_MAX_TOKENS": "1000",
        }
        with patch.dict("os.environ", env):
            client = StudyGuideClient.from_settings()
        self.assertEqual(client.model_name, "meta/other")
        self.assertEqual(client.temperature, 0.7)
        self.assertEqual(client.max_tokens, 1000)
        self.assertTrue(client.configured)


class TestBuildNvidiaChatClient(unittest.TestCase):
    def test_passes_generation_parameters(self):
        with patch("smartstudy.clients.llm_client.ChatNVIDIA") as mock_chat:
            build_nvidia_chat_client("meta/test", 0.2, 300, api_key="nvapi-x")
        mock_chat.assert_called_once_with(model="meta/test", temperature=0.2, max_tokens=300, api_key="nvapi-x")

    def test_omits_empty_api_key(self):
        with patch("smartstudy.clients.llm_client.ChatNVIDIA") as mock_chat:
            build_nvidia_chat_client("meta/test", 0.2, 300)
        mock_chat.assert_called_once_with(model="meta/test", temperature=0.2, max_tokens=300)


if __name__ == "__main__":
    unittest.main()
