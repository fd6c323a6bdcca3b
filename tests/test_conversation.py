import asyncio
import unittest

from voicebot.models.conversation import ConversationSession, SessionManager
from voicebot.models.schemas import ChatRole, ChatTurn


class TestConversationSession(unittest.TestCase):

    def setUp(self):
        self.session = ConversationSession("session-1", "You are a receptionist.", "+12025550123")

    def test_first_turn_is_system_prompt(self):
        # Assert
        self.assertEqual(
            self.session.history(),
            [ChatTurn(role=ChatRole.SYSTEM, content="You are a receptionist.")],
        )
        self.assertEqual(self.session.caller_id, "+12025550123")
        self.assertIsNone(self.session.call_connection_id)

    def test_append_preserves_order(self):
        # Execute
        self.session.append(ChatRole.ASSISTANT, "What is your name?")
        self.session.append(ChatRole.USER, "John Smith")

        # Assert
        roles = [turn.role for turn in self.session.history()]
        self.assertEqual(roles, [ChatRole.SYSTEM, ChatRole.ASSISTANT, ChatRole.USER])
        self.assertEqual(len(self.session), 3)

    def test_history_is_a_copy(self):
        # Execute
        history = self.session.history()
        history.append(ChatTurn(role=ChatRole.USER, content="injected"))

        # Assert
        self.assertEqual(len(self.session), 1)

    def test_lock_is_per_session(self):
        other = ConversationSession("session-2", "prompt")
        self.assertIsInstance(self.session.lock, asyncio.Lock)
        self.assertIsNot(self.session.lock, other.lock)


class TestSessionManager(unittest.TestCase):

    def setUp(self):
        self.session_manager = SessionManager()

    def test_create_session(self):
        # Execute
        session = self.session_manager.create_session("prompt", "+12025550123")

        # Assert
        self.assertIn(session.session_id, self.session_manager.active_sessions)
        self.assertEqual(len(session), 1)
        self.assertEqual(session.history()[0].role, ChatRole.SYSTEM)
        self.assertEqual(session.history()[0].content, "prompt")

    def test_create_session_generates_unique_ids(self):
        ids = {self.session_manager.create_session("prompt").session_id for _ in range(50)}
        self.assertEqual(len(ids), 50)
        self.assertEqual(len(self.session_manager), 50)

    def test_get_session(self):
        # Setup
        session = self.session_manager.create_session("prompt")

        # Execute / Assert
        self.assertIs(self.session_manager.get_session(session.session_id), session)

    def test_get_nonexistent_session(self):
        self.assertIsNone(self.session_manager.get_session("nonexistent-id"))

    def test_remove_session(self):
        # Setup
        session = self.session_manager.create_session("prompt")

        # Execute
        removed = self.session_manager.remove_session(session.session_id)

        # Assert
        self.assertTrue(removed)
        self.assertNotIn(session.session_id, self.session_manager.active_sessions)

    def test_remove_nonexistent_session(self):
        # Execute - should not raise an exception
        self.assertFalse(self.session_manager.remove_session("nonexistent-id"))

    def test_get_all_sessions(self):
        # Setup
        first = self.session_manager.create_session("first")
        second = self.session_manager.create_session("second")

        # Execute
        all_sessions = self.session_manager.get_all_sessions()

        # Assert
        self.assertEqual(len(all_sessions), 2)
        self.assertIs(all_sessions[first.session_id], first)
        self.assertIs(all_sessions[second.session_id], second)
