# =============================================================================
# TESTS - Learning Assistant
# =============================================================================
# Chat replies, task guides and their fallbacks
# =============================================================================

import json

import pytest


class TestAsk:
    """Tests for ask() and the conversation history."""

    @pytest.mark.asyncio
    async def test_reply(self, mock_backend):
        """The reply text is returned and both turns are recorded."""
        from learnkit.engine.assistant import LearningAssistant

        mock_backend.generate_content.return_value = "Use PUT for full updates."
        assistant = LearningAssistant(mock_backend, role="Backend Engineer", context="REST")

        reply = await assistant.ask("  When do I use PUT?  ")

        assert reply == "Use PUT for full updates."
        mock_backend.generate_content.assert_awaited_once_with(
            "Backend Engineer", "When do I use PUT?", "REST"
        )
        assert [m.role for m in assistant.history] == ["user", "assistant"]

    @pytest.mark.asyncio
    async def test_backend_failure_apologizes(self, mock_backend):
        """A failing backend yields the fixed apology, not an exception."""
        from learnkit.engine.assistant import LearningAssistant
        from learnkit.exceptions import BackendError
        from learnkit.prompts.templates import CHAT_FALLBACK_REPLY

        mock_backend.generate_content.side_effect = BackendError(message="down")
        assistant = LearningAssistant(mock_backend, role="Dev")

        reply = await assistant.ask("Hello?")

        assert reply == CHAT_FALLBACK_REPLY
        assert assistant.history[-1].content == CHAT_FALLBACK_REPLY

    @pytest.mark.asyncio
    async def test_blank_message(self, mock_backend):
        from learnkit.engine.assistant import LearningAssistant
        from learnkit.exceptions import InvalidInputError

        assistant = LearningAssistant(mock_backend)

        with pytest.raises(InvalidInputError):
            await assistant.ask("   ")
        mock_backend.generate_content.assert_not_called()

    def test_greet_and_reset(self, mock_backend):
        from learnkit.engine.assistant import LearningAssistant

        assistant = LearningAssistant(mock_backend, context="Docker basics")

        greeting = assistant.greet()
        assert '"Docker basics"' in greeting
        assert assistant.history[0].to_dict() == {"role": "assistant", "content": greeting}

        assistant.reset()
        assert assistant.history == []


class TestTaskGuide:
    """Tests for fetch_task_guide()."""

    @pytest.mark.asyncio
    async def test_guide_in_prose(self, mock_backend):
        """A guide object surrounded by prose is still found."""
        from learnkit.engine.assistant import LearningAssistant

        guide_data = {
            "title": "Add authentication",
            "overview": "Protect the API with JWT",
            "steps": [{"title": "Install library", "description": "pip install", "code": None}],
            "tips": ["Rotate secrets"],
            "troubleshooting": ["401 on every call: check the header"],
        }
        mock_backend.generate_content.return_value = (
            "Here is your guide:\n" + json.dumps(guide_data) + "\nHappy coding!"
        )
        assistant = LearningAssistant(mock_backend)

        guide = await assistant.fetch_task_guide("Add authentication", project_title="Notes API")

        assert guide.generated is True
        assert guide.steps[0].title == "Install library"
        role, message, context = mock_backend.generate_content.call_args.args
        assert role == "Software Engineer"
        assert '"Add authentication"' in message
        assert context == "Project: Notes API, Current task: Add authentication"

    @pytest.mark.asyncio
    async def test_unparseable_guide(self, mock_backend):
        """No JSON in the reply gives the placeholder guide."""
        from learnkit.engine.assistant import LearningAssistant

        mock_backend.generate_content.return_value = "I could not do that."
        assistant = LearningAssistant(mock_backend)

        guide = await assistant.fetch_task_guide("Write tests")

        assert guide.generated is False
        assert guide.title == "Write tests"
        assert guide.steps == []

    @pytest.mark.asyncio
    async def test_backend_failure(self, mock_backend):
        from learnkit.engine.assistant import LearningAssistant
        from learnkit.exceptions import BackendHTTPError

        mock_backend.generate_content.side_effect = BackendHTTPError(
            message="HTTP 500", status_code=500
        )
        assistant = LearningAssistant(mock_backend)

        guide = await assistant.fetch_task_guide("Deploy")

        assert guide.generated is False
        assert guide.title == "Deploy"
