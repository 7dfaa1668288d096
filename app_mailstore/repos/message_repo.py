"""
Message row repository

One partition per message, keyed by mailbox and the sortable message id.
Header fields are plain columns; every label and marker a message carries is
an empty column named with its prefix, so that they can be added and removed
without reading the row first.
"""
import logging
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from app_mailstore.conn.kv_store import KeyValueStore, WriteBatch, build_partition
from app_mailstore.consts.mailstore_const import CF_MESSAGES, CN_LABEL_PREFIX, CN_MARKER_PREFIX
from app_mailstore.enums.marker_enum import MarkerEnum
from app_mailstore.models.mailbox import Mailbox
from app_mailstore.models.message import Message
from app_mailstore.utils.time_uuid_util import to_sortable
from common.utils.date_util import get_datetime_of_timestamp_ms, get_timestamp_ms_of_datetime

logger = logging.getLogger(__name__)

CN_SIZE = "size"
CN_LOCATION = "location"
CN_FROM = "from"
CN_TO = "to"
CN_SUBJECT = "subject"
CN_DATE = "date"
CN_MINOR_HEADERS = "minor"


def label_attribute(label_id: int) -> str:
    return f"{CN_LABEL_PREFIX}{label_id}"


def marker_attribute(marker: MarkerEnum) -> str:
    return f"{CN_MARKER_PREFIX}{int(marker)}"


class MessageRepo:

    def __init__(self, kv_store: KeyValueStore):
        self.kv_store = kv_store

    def persist_message(self, batch: WriteBatch, mailbox: Mailbox, message_id: UUID, message: Message) -> None:
        columns = {
            CN_SIZE: message.size,
            CN_LOCATION: message.location,
            CN_FROM: message.from_address,
            CN_TO: list(message.to_addresses),
            CN_SUBJECT: message.subject,
            CN_DATE: get_timestamp_ms_of_datetime(message.date) if message.date else None,
            CN_MINOR_HEADERS: dict(message.minor_headers),
        }
        columns.update({label_attribute(label_id): "" for label_id in message.labels})
        columns.update({marker_attribute(marker): "" for marker in message.markers})
        batch.upsert(CF_MESSAGES, self._partition(mailbox, message_id), columns)

    def fetch(self, mailbox: Mailbox, message_id: UUID) -> Optional[Message]:
        row = self.kv_store.get_row(CF_MESSAGES, self._partition(mailbox, message_id))
        if not row:
            return None
        return self._unmarshal(row)

    def fetch_many(self, mailbox: Mailbox, message_ids: Iterable[UUID]) -> Dict[UUID, Message]:
        """
        Fetch messages in the given order, missing messages are left out
        """
        messages = {}
        for message_id in message_ids:
            if message_id in messages:
                continue
            message = self.fetch(mailbox, message_id)
            if message is None:
                logger.debug(f"[fetch_many] Message not found: mailbox={mailbox}, id={message_id}")
                continue
            messages[message_id] = message
        return messages

    def persist_attributes(self, batch: WriteBatch, mailbox: Mailbox, message_ids: Iterable[UUID],
                           attributes: List[str]) -> None:
        for message_id in message_ids:
            batch.upsert(CF_MESSAGES, self._partition(mailbox, message_id),
                         {attribute: "" for attribute in attributes})

    def delete_attributes(self, batch: WriteBatch, mailbox: Mailbox, message_ids: Iterable[UUID],
                          attributes: List[str]) -> None:
        for message_id in message_ids:
            batch.delete_columns(CF_MESSAGES, self._partition(mailbox, message_id), attributes)

    def delete_messages(self, batch: WriteBatch, mailbox: Mailbox, message_ids: Iterable[UUID]) -> None:
        for message_id in message_ids:
            batch.delete_row(CF_MESSAGES, self._partition(mailbox, message_id))

    @staticmethod
    def _partition(mailbox: Mailbox, message_id: UUID) -> str:
        return build_partition(mailbox.id, to_sortable(message_id))

    @staticmethod
    def _unmarshal(row: dict) -> Message:
        message = Message(
            size=row.get(CN_SIZE) or 0,
            location=row.get(CN_LOCATION),
            from_address=row.get(CN_FROM),
            to_addresses=list(row.get(CN_TO) or []),
            subject=row.get(CN_SUBJECT),
            date=get_datetime_of_timestamp_ms(row[CN_DATE]) if row.get(CN_DATE) is not None else None,
            minor_headers=dict(row.get(CN_MINOR_HEADERS) or {}),
        )
        for column in row:
            if column.startswith(CN_LABEL_PREFIX):
                message.add_label(int(column[len(CN_LABEL_PREFIX):]))
            elif column.startswith(CN_MARKER_PREFIX):
                message.add_marker(MarkerEnum(int(column[len(CN_MARKER_PREFIX):])))
        return message
