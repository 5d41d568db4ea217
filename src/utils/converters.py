"""Conversions between ORM models and API schemas."""

from models.announcement import AnnouncementModel
from models.document_request import DocumentRequestModel
from models.message import MessageModel
from models.support_ticket import SupportTicketModel
from models.user import UserModel
from schemas.announcement import Announcement
from schemas.document_request import DocumentRequest
from schemas.message import Message
from schemas.ticket import SupportTicket
from schemas.user import User


def user_to_model(user: User) -> UserModel:
    return UserModel(
        id=user.id,
        email=user.email,
        student_id=user.student_id,
        first_name=user.first_name,
        last_name=user.last_name,
        password_hash=user.password_hash,
        role=user.role,
        created_at=user.created_at,
    )


def model_to_user(model: UserModel) -> User:
    return User(
        id=model.id,
        email=model.email,
        student_id=model.student_id,
        first_name=model.first_name,
        last_name=model.last_name,
        password_hash=model.password_hash,
        role=model.role,
        created_at=model.created_at,
    )


def model_to_request(model: DocumentRequestModel) -> DocumentRequest:
    return DocumentRequest(
        id=model.id,
        student_id=model.student_id,
        student_name=model.student_name,
        document_type=model.document_type,
        quantity=model.quantity,
        price_per_copy=model.price_per_copy,
        total=model.total,
        status=model.status,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def model_to_message(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        conversation_id=model.conversation_id,
        sender_id=model.sender_id,
        sender_name=model.sender_name,
        sender_role=model.sender_role,
        text=model.text,
        file_url=model.file_url,
        timestamp=model.timestamp,
        read=model.read,
    )


def model_to_ticket(model: SupportTicketModel) -> SupportTicket:
    return SupportTicket(
        id=model.id,
        student_id=model.student_id,
        student_name=model.student_name,
        subject=model.subject,
        description=model.description,
        attachment_url=model.attachment_url,
        status=model.status,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def model_to_announcement(model: AnnouncementModel) -> Announcement:
    return Announcement(
        id=model.id,
        title=model.title,
        body=model.body,
        expiry_date=model.expiry_date,
        active=model.active,
        created_at=model.created_at,
        created_by=model.created_by,
        updated_at=model.updated_at,
    )
