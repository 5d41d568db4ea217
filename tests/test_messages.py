from datetime import datetime

import pytest
import pytz

from core.exceptions import ConversationLockedError, ConversationNotFoundError, ValidationError
from models.document_request import DocumentRequestModel
from utils.message_manager import MessageManager
from utils.request_manager import RequestManager


@pytest.fixture
def message_manager(db_session) -> MessageManager:
    return MessageManager(db_session)


@pytest.fixture
def request_manager(db_session) -> RequestManager:
    return RequestManager(db_session)


@pytest.fixture
def open_request(request_manager, student):
    request, _ = request_manager.create_request(student, "tor", 1)
    return request


class TestSendMessage:
    def test_student_sends_to_own_conversation(self, message_manager, open_request, student):
        message = message_manager.send_message(
            open_request.id, student, "Here is my receipt", "https://files.example/receipt.png"
        )

        assert message.conversation_id == open_request.id
        assert message.sender_id == student.id
        assert message.sender_name == "Juan Dela Cruz"
        assert message.sender_role == "student"
        assert message.file_url == "https://files.example/receipt.png"
        assert message.read is False

    def test_admin_can_send_to_any_conversation(self, message_manager, open_request, admin):
        message = message_manager.send_message(open_request.id, admin, "Received, thanks")

        assert message.sender_role == "admin"

    def test_unknown_conversation(self, message_manager, student):
        with pytest.raises(ConversationNotFoundError):
            message_manager.send_message("nope", student, "hello")

    def test_foreign_conversation_is_hidden(self, message_manager, open_request, other_student):
        with pytest.raises(ConversationNotFoundError):
            message_manager.send_message(open_request.id, other_student, "hello")

    def test_empty_message(self, message_manager, open_request, student):
        with pytest.raises(ValidationError):
            message_manager.send_message(open_request.id, student, "")

    @pytest.mark.parametrize("status", ["processing", "ready"])
    def test_open_until_completed(self, message_manager, request_manager, open_request, student, status):
        request_manager.update_status(open_request.id, status)

        assert message_manager.send_message(open_request.id, student, "any news?")

    def test_completed_conversation_is_locked(
        self, message_manager, request_manager, open_request, student, admin
    ):
        request_manager.update_status(open_request.id, "completed")

        for sender in (student, admin):
            with pytest.raises(ConversationLockedError, match="Conversation is closed"):
                message_manager.send_message(open_request.id, sender, "one more thing")


def test_list_messages_oldest_first(message_manager, request_manager, open_request, student, admin):
    message_manager.send_message(open_request.id, student, "first")
    request_manager.update_status(open_request.id, "processing")
    message_manager.send_message(open_request.id, admin, "last")

    texts = [m.text for m in message_manager.list_messages(open_request.id, student)]

    assert texts[0].startswith("Your request has been received")
    assert texts[1:] == [
        "first",
        "Payment confirmed. Your request is now being processed.",
        "last",
    ]


def test_list_messages_hidden_from_other_students(message_manager, open_request, other_student):
    with pytest.raises(ConversationNotFoundError):
        message_manager.list_messages(open_request.id, other_student)


def test_conversations_ordering(message_manager, request_manager, db_session, student):
    older, _ = request_manager.create_request(student, "tor", 1)
    newer, _ = request_manager.create_request(student, "grades", 1)
    now = datetime.now(pytz.utc).isoformat()
    silent = DocumentRequestModel(
        id="silent-request",
        student_id=student.id,
        student_name="Juan Dela Cruz",
        document_type="diploma",
        quantity=1,
        price_per_copy=150,
        total=150,
        status="completed",
        created_at=now,
        updated_at=now,
    )
    db_session.add(silent)
    db_session.commit()

    ids = [c.id for c in message_manager.list_conversations(student)]
    assert ids == [newer.id, older.id, "silent-request"]

    message_manager.send_message(older.id, student, "bump")

    conversations = message_manager.list_conversations(student)
    assert [c.id for c in conversations] == [older.id, newer.id, "silent-request"]
    assert conversations[0].last_message.text == "bump"
    assert conversations[-1].last_message is None
    assert conversations[-1].unread_count == 0


def test_unread_count_and_mark_read(message_manager, request_manager, open_request, student, admin):
    request_manager.update_status(open_request.id, "processing")
    message_manager.send_message(open_request.id, student, "paid via bank transfer")

    (student_view,) = message_manager.list_conversations(student)
    (admin_view,) = message_manager.list_conversations(admin)
    # two system messages for the student; the student's own message is not counted
    assert student_view.unread_count == 2
    # the admin did not send anything, so all three count
    assert admin_view.unread_count == 3

    assert message_manager.mark_read(open_request.id, student) == 2
    assert message_manager.list_conversations(student)[0].unread_count == 0
    assert message_manager.list_conversations(admin)[0].unread_count == 1


def test_conversations_are_scoped(message_manager, request_manager, student, other_student, admin):
    mine, _ = request_manager.create_request(student, "tor", 1)
    request_manager.create_request(other_student, "tor", 1)

    assert [c.id for c in message_manager.list_conversations(student)] == [mine.id]
    assert len(message_manager.list_conversations(admin)) == 2


class TestMessageRoutes:
    def _create_request(self, client, headers):
        return client.post(
            "/api/requests", json={"documentType": "tor", "quantity": 1}, headers=headers
        ).json()["request"]

    def test_send_and_list(self, client, student_headers):
        request = self._create_request(client, student_headers)

        sent = client.post(
            "/api/messages",
            json={"conversationId": request["id"], "text": "hello"},
            headers=student_headers,
        )
        assert sent.status_code == 200
        assert sent.json()["message"]["text"] == "hello"
        assert sent.json()["message"]["read"] is False

        listed = client.get(f"/api/messages/{request['id']}", headers=student_headers)
        assert listed.status_code == 200
        assert [m["text"] for m in listed.json()["messages"]][-1] == "hello"

    def test_send_unknown(self, client, student_headers):
        response = client.post(
            "/api/messages", json={"conversationId": "missing", "text": "hi"}, headers=student_headers
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Conversation not found"}

    def test_send_locked(self, client, student_headers, admin_headers):
        request = self._create_request(client, student_headers)
        client.put(f"/api/requests/{request['id']}", json={"status": "completed"}, headers=admin_headers)

        response = client.post(
            "/api/messages",
            json={"conversationId": request["id"], "text": "hi"},
            headers=student_headers,
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Conversation is closed"}

    def test_requires_auth(self, client):
        assert client.get("/api/conversations").status_code == 401
        assert client.post("/api/messages", json={"conversationId": "x", "text": "y"}).status_code == 401

    def test_conversations_and_mark_read(self, client, student_headers, admin_headers):
        request = self._create_request(client, student_headers)

        conversations = client.get("/api/conversations", headers=student_headers).json()["conversations"]
        assert len(conversations) == 1
        assert conversations[0]["id"] == request["id"]
        assert conversations[0]["documentType"] == "tor"
        assert conversations[0]["lastMessage"]["senderId"] == "system"
        assert conversations[0]["unreadCount"] == 1

        marked = client.put(f"/api/messages/{request['id']}/read", headers=student_headers)
        assert marked.status_code == 200
        assert marked.json() == {"success": True, "updated": 1}

        conversations = client.get("/api/conversations", headers=student_headers).json()["conversations"]
        assert conversations[0]["unreadCount"] == 0
