"""
Message store service

This service handles the message lifecycle on top of the backing store:
- put: quota check, payload to the blob gateway, then row, index and counters in one batch
- label and marker mutations, keeping label index and counters in step
- soft delete into the purge queue, and the purge sweep removing rows and payloads

Related writes of one operation are sent as one batch. The backing store does
not apply a batch atomically across partitions, so a failure half way can
leave counters out of step with the index; LabelStore.set_counters repairs them.
"""
import logging
from datetime import datetime
from typing import BinaryIO, Dict, Iterable, List, Optional
from uuid import UUID

from app_mailstore.conn.kv_store import KeyValueStore, WriteBatch
from app_mailstore.consts.mailstore_const import DEFAULT_WINDOW_SIZE, DEFAULT_QUOTA_BYTES, DEFAULT_QUOTA_COUNT
from app_mailstore.enums.marker_enum import MarkerEnum
from app_mailstore.enums.reserved_label_enum import ReservedLabelEnum
from app_mailstore.exceptions.illegal_label_exception import IllegalLabelException
from app_mailstore.exceptions.message_not_found_exception import MessageNotFoundException
from app_mailstore.exceptions.over_quota_exception import OverQuotaException
from app_mailstore.exceptions.storage_exception import StorageException
from app_mailstore.models.label_counters import LabelCounters
from app_mailstore.models.mailbox import Mailbox
from app_mailstore.models.message import Message, MessageModification
from app_mailstore.repos.counter_repo import CounterStore
from app_mailstore.repos.label_index_repo import LabelIndex
from app_mailstore.repos.message_repo import MessageRepo, label_attribute, marker_attribute
from app_mailstore.repos.purge_queue_repo import PurgeQueue
from app_mailstore.services.blob_gateway import BlobGateway
from app_mailstore.services.blob_naming import BlobNameBuilder, BlobNamingPolicy
from app_mailstore.utils.time_uuid_util import check_time_uuid
from common.utils.date_util import get_timestamp_ms_of_datetime

logger = logging.getLogger(__name__)

ALL_MAILS = ReservedLabelEnum.ALL_MAILS.label_id

# cutoff beyond any purge queue timestamp
PURGE_ALL_CUTOFF_MS = 10 ** 13 - 1


class MessageStore:
    """Message store service"""

    def __init__(self,
                 kv_store: KeyValueStore,
                 blob_gateway: BlobGateway,
                 quota_bytes: int = DEFAULT_QUOTA_BYTES,
                 quota_count: int = DEFAULT_QUOTA_COUNT,
                 window_size: int = DEFAULT_WINDOW_SIZE,
                 naming_policy: BlobNamingPolicy = None):
        if window_size <= 0:
            raise ValueError(f"window_size must be positive, got {window_size}")

        self.kv_store = kv_store
        self.blob_gateway = blob_gateway
        self.quota_bytes = quota_bytes
        self.quota_count = quota_count
        self.window_size = window_size
        self.blob_name_builder = BlobNameBuilder(naming_policy)

        self.message_repo = MessageRepo(kv_store)
        self.label_index = LabelIndex(kv_store)
        self.counter_store = CounterStore(kv_store)
        self.purge_queue = PurgeQueue(kv_store)

    def put(self, mailbox: Mailbox, message_id: UUID, message: Message, payload: Optional[BinaryIO] = None) -> None:
        """
        Store message metadata and payload

        Args:
            mailbox: Mailbox receiving the message
            message_id: Time based message id
            message: Message metadata, its labels are extended with the "all" label
            payload: Raw message stream, written to the blob gateway and closed afterwards

        Raises:
            ValueError: Message id is not a time based UUID, nothing written
            OverQuotaException: Mailbox would exceed its byte or message quota, nothing written
            StorageException: Payload or metadata could not be stored
        """
        logger.info(f"[put] Storing message: mailbox={mailbox}, id={message_id}")

        check_time_uuid(message_id)
        self._check_quota(mailbox, message)

        # order is important, the row must never point to a missing blob
        location = None
        if payload is not None:
            blob_name = self.blob_name_builder.build(mailbox, message_id, message.size)
            try:
                location = self.blob_gateway.write(blob_name, payload, message.size)
            except Exception as e:
                logger.exception(f"[put] Failed to store blob {blob_name}: {e}")
                raise StorageException(f"Failed to store blob: {blob_name}") from e
            finally:
                payload.close()
            message.location = location

        message.add_label(ALL_MAILS)

        try:
            batch = WriteBatch()
            self.message_repo.persist_message(batch, mailbox, message_id, message)
            self.label_index.add(batch, mailbox, [message_id], message.labels)
            self.counter_store.add(batch, mailbox, message.labels, message.get_label_counters())
            self.kv_store.execute(batch)
        except Exception as e:
            logger.warning(f"[put] Unable to store metadata for message {message_id}, deleting blob {location}")
            if location is not None:
                self._delete_blob(location)
            raise StorageException(f"Unable to store message metadata: {message_id}") from e

    def get_parsed(self, mailbox: Mailbox, message_id: UUID) -> Message:
        message = self.message_repo.fetch(mailbox, message_id)
        if message is None:
            raise MessageNotFoundException(f"Message not found: {message_id}")
        return message

    def get_raw(self, mailbox: Mailbox, message_id: UUID) -> BinaryIO:
        message = self.get_parsed(mailbox, message_id)
        if not message.location:
            raise MessageNotFoundException(f"Message has no stored payload: {message_id}")
        try:
            return self.blob_gateway.read(message.location)
        except StorageException:
            raise
        except Exception as e:
            logger.exception(f"[get_raw] Failed to read blob {message.location}: {e}")
            raise StorageException(f"Failed to read blob: {message.location}") from e

    def list_by_label(self, mailbox: Mailbox, label_id: int, cursor: Optional[UUID] = None,
                      count: int = DEFAULT_WINDOW_SIZE, reverse: bool = False) -> List[UUID]:
        return self.label_index.scan(mailbox, label_id, cursor, count, reverse)

    def list_by_label_with_headers(self, mailbox: Mailbox, label_id: int, cursor: Optional[UUID] = None,
                                   count: int = DEFAULT_WINDOW_SIZE, reverse: bool = False) -> Dict[UUID, Message]:
        message_ids = self.list_by_label(mailbox, label_id, cursor, count, reverse)
        return self.message_repo.fetch_many(mailbox, message_ids)

    def add_label(self, mailbox: Mailbox, label_ids: Iterable[int], message_ids: Iterable[UUID]) -> None:
        label_ids = set(label_ids)
        message_ids = list(message_ids)
        if not label_ids or not message_ids:
            return

        messages = self._fetch_live(mailbox, message_ids)

        batch = WriteBatch()
        for label_id in label_ids:
            # messages already carrying the label must not be counted twice
            targets = [message_id for message_id, message in messages.items() if label_id not in message.labels]
            if not targets:
                continue
            delta = self._count_stats(messages, targets)
            self.message_repo.persist_attributes(batch, mailbox, targets, [label_attribute(label_id)])
            self.label_index.add(batch, mailbox, targets, [label_id])
            self.counter_store.add(batch, mailbox, [label_id], delta)

        self.kv_store.execute(batch)
        logger.debug(f"[add_label] mailbox={mailbox}, labels={label_ids}, messages={len(messages)}")

    def remove_label(self, mailbox: Mailbox, label_ids: Iterable[int], message_ids: Iterable[UUID]) -> None:
        label_ids = set(label_ids)
        message_ids = list(message_ids)
        if not label_ids or not message_ids:
            return

        if ALL_MAILS in label_ids:
            raise IllegalLabelException("This label cannot be removed")

        messages = self._fetch_live(mailbox, message_ids)

        batch = WriteBatch()
        for label_id in label_ids:
            targets = [message_id for message_id, message in messages.items() if label_id in message.labels]
            if not targets:
                continue
            delta = self._count_stats(messages, targets)
            self.message_repo.delete_attributes(batch, mailbox, targets, [label_attribute(label_id)])
            self.label_index.remove(batch, mailbox, targets, [label_id])
            self.counter_store.subtract(batch, mailbox, [label_id], delta)

        self.kv_store.execute(batch)
        logger.debug(f"[remove_label] mailbox={mailbox}, labels={label_ids}, messages={len(messages)}")

    def add_marker(self, mailbox: Mailbox, markers: Iterable[MarkerEnum], message_ids: Iterable[UUID]) -> None:
        markers = set(markers)
        message_ids = list(message_ids)
        if not markers or not message_ids:
            return

        messages = self._fetch_live(mailbox, message_ids)
        if not messages:
            return

        batch = WriteBatch()
        self.message_repo.persist_attributes(batch, mailbox, messages.keys(),
                                             [marker_attribute(marker) for marker in markers])

        # only messages not seen yet stop being counted as unseen
        if MarkerEnum.SEEN in markers:
            for label_id, counters in self._count_stats_by_label(messages).items():
                if counters.unseen_messages:
                    self.counter_store.subtract(batch, mailbox, [label_id],
                                                LabelCounters(unseen_messages=counters.unseen_messages))

        self.kv_store.execute(batch)

    def remove_marker(self, mailbox: Mailbox, markers: Iterable[MarkerEnum], message_ids: Iterable[UUID]) -> None:
        markers = set(markers)
        message_ids = list(message_ids)
        if not markers or not message_ids:
            return

        messages = self._fetch_live(mailbox, message_ids)
        if not messages:
            return

        batch = WriteBatch()
        self.message_repo.delete_attributes(batch, mailbox, messages.keys(),
                                            [marker_attribute(marker) for marker in markers])

        # only messages seen so far become unseen again
        if MarkerEnum.SEEN in markers:
            for label_id, counters in self._count_stats_by_label(messages).items():
                seen_messages = counters.total_messages - counters.unseen_messages
                if seen_messages:
                    self.counter_store.add(batch, mailbox, [label_id],
                                           LabelCounters(unseen_messages=seen_messages))

        self.kv_store.execute(batch)

    def modify(self, mailbox: Mailbox, message_ids: Iterable[UUID], modification: MessageModification) -> None:
        """
        Apply label and marker changes to the messages, each part in its own batch
        """
        message_ids = list(message_ids)
        if modification.is_empty() or not message_ids:
            return
        if ALL_MAILS in modification.labels_to_remove:
            raise IllegalLabelException("This label cannot be removed")

        if modification.labels_to_add:
            self.add_label(mailbox, modification.labels_to_add, message_ids)
        if modification.labels_to_remove:
            self.remove_label(mailbox, modification.labels_to_remove, message_ids)
        if modification.markers_to_add:
            self.add_marker(mailbox, modification.markers_to_add, message_ids)
        if modification.markers_to_remove:
            self.remove_marker(mailbox, modification.markers_to_remove, message_ids)

    def modify_one(self, mailbox: Mailbox, message_id: UUID, modification: MessageModification) -> None:
        self.modify(mailbox, [message_id], modification)

    def delete(self, mailbox: Mailbox, message_ids: Iterable[UUID]) -> None:
        """
        Soft delete: queue messages for purge and take them out of every label.
        Rows and payloads stay until the purge sweep.

        Messages already deleted are skipped, so deleting again later subtracts
        nothing. The liveness check and the write are not atomic: two concurrent
        deletes of the same message both subtract its counters, as do concurrent
        add_label/remove_label calls for the same label. LabelStore.set_counters
        repairs such drift.
        """
        messages = self._fetch_live(mailbox, list(message_ids))
        if not messages:
            return

        batch = WriteBatch()
        self.purge_queue.add(batch, mailbox, messages.keys())

        # remove from all label indexes, including "all"
        for label_id, counters in self._count_stats_by_label(messages).items():
            self.label_index.remove(batch, mailbox, messages.keys(), [label_id])
            self.counter_store.subtract(batch, mailbox, [label_id], counters)

        self.kv_store.execute(batch)
        logger.info(f"[delete] Queued {len(messages)} messages for purge: mailbox={mailbox}")

    def delete_one(self, mailbox: Mailbox, message_id: UUID) -> None:
        self.delete(mailbox, [message_id])

    def purge(self, mailbox: Mailbox, age: Optional[datetime] = None) -> int:
        """
        Physically remove messages queued for purge before the given date

        Args:
            mailbox: Mailbox to sweep
            age: Cutoff date, None to purge everything queued

        Returns:
            Number of purged messages
        """
        cutoff_ms = get_timestamp_ms_of_datetime(age) if age is not None else PURGE_ALL_CUTOFF_MS
        logger.debug(f"[purge] Purging messages queued before {cutoff_ms} for {mailbox}")

        purged = 0
        while True:
            entries = self.purge_queue.get(mailbox, cutoff_ms, self.window_size)
            if entries:
                message_ids = [entry.message_id for entry in entries]
                messages = self.message_repo.fetch_many(mailbox, message_ids)

                for message in messages.values():
                    if message.location:
                        self._delete_blob(message.location)

                batch = WriteBatch()
                self.message_repo.delete_messages(batch, mailbox, message_ids)
                self.purge_queue.remove(batch, mailbox, entries)
                self.kv_store.execute(batch)
                purged += len(entries)

            if len(entries) < self.window_size:
                break

        if purged:
            logger.info(f"[purge] Purged {purged} messages: mailbox={mailbox}")
        return purged

    def _check_quota(self, mailbox: Mailbox, message: Message) -> None:
        counters = self.counter_store.get(mailbox, ALL_MAILS)

        required_bytes = counters.total_bytes + message.size
        required_count = counters.total_messages + 1

        if required_bytes > self.quota_bytes or required_count > self.quota_count:
            logger.info(f"[put] Mailbox is over quota: {mailbox} size={required_bytes}/{self.quota_bytes}, "
                        f"count={required_count}/{self.quota_count}")
            raise OverQuotaException("Mailbox is over quota")

    def _fetch_live(self, mailbox: Mailbox, message_ids: List[UUID]) -> Dict[UUID, Message]:
        """
        Fetch messages that are still listed under the "all" label, soft-deleted
        and unknown messages are left out
        """
        if not message_ids:
            return {}
        live = self.label_index.contains(mailbox, ALL_MAILS, message_ids)
        return self.message_repo.fetch_many(mailbox, [message_id for message_id in message_ids
                                                      if message_id in live])

    def _delete_blob(self, location: str) -> None:
        try:
            self.blob_gateway.delete(location)
        except Exception as e:
            logger.error(f"[_delete_blob] Failed to delete blob {location}: {e}")

    @staticmethod
    def _count_stats(messages: Dict[UUID, Message], message_ids: Iterable[UUID]) -> LabelCounters:
        counters = LabelCounters()
        for message_id in message_ids:
            counters = counters + messages[message_id].get_label_counters()
        return counters

    @staticmethod
    def _count_stats_by_label(messages: Dict[UUID, Message]) -> Dict[int, LabelCounters]:
        """Aggregate counter contributions of the messages per label they carry"""
        stats: Dict[int, LabelCounters] = {}
        for message in messages.values():
            for label_id in message.labels:
                stats[label_id] = stats.get(label_id, LabelCounters()) + message.get_label_counters()
        return stats
