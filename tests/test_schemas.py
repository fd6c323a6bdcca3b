import pytest
from pydantic import ValidationError

from voicebot.models.schemas import (
    CallEventData,
    CallRequest,
    ChatRole,
    ChatTurn,
    RecognizeCompletedData,
)


class TestChatTurn:

    def test_to_message(self):
        turn = ChatTurn(role=ChatRole.USER, content="John Smith")
        assert turn.to_message() == {"role": "user", "content": "John Smith"}

    def test_role_from_string(self):
        assert ChatTurn(role="assistant", content="Hi").role is ChatRole.ASSISTANT

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            ChatTurn(role="function", content="x")


class TestCallRequest:

    def test_valid_request(self):
        request = CallRequest(phoneNumber="+12025550123", prompt="Be friendly.")
        assert request.phoneNumber == "+12025550123"
        assert request.prompt == "Be friendly."

    def test_missing_prompt(self):
        with pytest.raises(ValidationError):
            CallRequest(phoneNumber="+12025550123")

    @pytest.mark.parametrize("field", ["phoneNumber", "prompt"])
    def test_blank_field_rejected(self, field):
        values = {"phoneNumber": "+12025550123", "prompt": "Be friendly."}
        values[field] = "   "
        with pytest.raises(ValidationError):
            CallRequest(**values)


class TestCallEventData:

    def test_extra_fields_kept(self):
        data = CallEventData(callConnectionId="conn-1", publicEventType="x")
        assert data.callConnectionId == "conn-1"
        assert data.model_extra["publicEventType"] == "x"

    def test_missing_call_connection_id(self):
        with pytest.raises(ValidationError):
            CallEventData(operationContext="ctx")

    def test_result_information(self):
        data = CallEventData(
            callConnectionId="conn-1",
            resultInformation={"code": 400, "subCode": 8510, "message": "Action failed"},
        )
        assert data.resultInformation.subCode == 8510


class TestRecognizeCompletedData:

    def test_speech_result(self):
        data = RecognizeCompletedData(
            callConnectionId="conn-1",
            recognitionType="speech",
            speechResult={"speech": "John Smith", "confidence": 0.9},
        )
        assert data.speech == "John Smith"

    def test_dtmf_result_has_no_speech(self):
        data = RecognizeCompletedData(
            callConnectionId="conn-1",
            recognitionType="dtmf",
            dtmfResult={"tones": ["one"]},
        )
        assert data.speech is None
